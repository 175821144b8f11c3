# student_api/core/handlers.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from student_api.core.exceptions import BaseAPIException
from student_api.core.logging import logger
from student_api.core.validation import format_validation_errors
from student_api.schemas.response import ErrorResponse


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


# 1. Handle domain errors (raised by our own code)
async def custom_api_exception_handler(request: Request, exc: BaseAPIException):
    return error_response(exc.status_code, exc.message)


# 2. Handle request validation errors raised by FastAPI itself
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, format_validation_errors(exc.errors()))


# 3. Handle standard HTTP errors (unknown URL, wrong method...)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


# 4. Handle anything else: log it, never leak it
async def general_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled Exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(BaseAPIException, custom_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
