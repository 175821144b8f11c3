from fastapi import status


class BaseAPIException(Exception):
    """
    Base class for every custom error raised by the service.
    Exception handlers turn it into the error envelope with ``status_code``.
    """
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


# =========================================================
# 1. INPUT ERRORS
# =========================================================

class InvalidArgument(BaseAPIException):
    """400: malformed, missing or out-of-range input."""
    def __init__(self, message: str = "invalid argument"):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST
        )


# =========================================================
# 2. STORAGE ERRORS
# =========================================================

class NotFound(BaseAPIException):
    """404: no student row matches the requested id."""
    def __init__(self, message: str = "student not found"):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND
        )


class ConstraintViolation(BaseAPIException):
    """409: the write was rejected by a uniqueness constraint."""
    def __init__(self, message: str = "constraint violation"):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT
        )


class StorageFailure(BaseAPIException):
    """
    500: any other database error (connection lost, bad statement, locked file...).
    The driver message is logged, never returned to the client.
    """
    def __init__(self, message: str = "storage failure"):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
