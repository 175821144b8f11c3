"""
Input checks shared by the endpoints and the exception handlers.

Every violation found in a payload is reported at once, joined into a single
comma-separated message.
"""

import json
import re
from typing import Any, Dict, Iterable, Type, TypeVar

from pydantic import BaseModel, ValidationError

from student_api.core.exceptions import InvalidArgument

ModelT = TypeVar("ModelT", bound=BaseModel)

_REQUIRED_ERROR_TYPES = {"missing", "string_too_short"}
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if part not in _LOCATION_PREFIXES]
    return ".".join(parts) if parts else "body"


def describe_error(error: Dict[str, Any]) -> str:
    """Turn one pydantic error dict into a client-facing message."""
    field = _field_name(error.get("loc", ()))
    error_type = error.get("type", "")

    if error_type in _REQUIRED_ERROR_TYPES:
        return f"field '{field}' is required"
    if field == "email":
        return f"field '{field}' must be a valid email"
    return f"field '{field}' is invalid"


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    messages = []
    for error in errors:
        message = describe_error(error)
        if message not in messages:
            messages.append(message)
    return ", ".join(messages)


def validate_payload(schema: Type[ModelT], payload: Any) -> ModelT:
    """Validate a decoded body against ``schema``, raising InvalidArgument on failure."""
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise InvalidArgument(format_validation_errors(exc.errors())) from exc


def decode_json_body(raw: bytes, allow_empty: bool = False) -> Dict[str, Any]:
    """
    Decode a request body into a JSON object.

    An empty body is an error unless ``allow_empty`` is set, in which case it
    decodes to ``{}``.
    """
    if not raw.strip():
        if allow_empty:
            return {}
        raise InvalidArgument("empty request body")

    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise InvalidArgument(f"invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise InvalidArgument("request body must be a JSON object")
    return payload


def parse_student_id(raw: str) -> int:
    if not _ID_PATTERN.fullmatch(raw):
        raise InvalidArgument("invalid student ID")
    student_id = int(raw)
    if not _INT64_MIN <= student_id <= _INT64_MAX:
        raise InvalidArgument("invalid student ID")
    return student_id
