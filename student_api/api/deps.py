from typing import Any, Dict, Generator

from fastapi import Request
from sqlalchemy.orm import Session

from student_api.core.validation import decode_json_body, parse_student_id


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session for one request, taken from the app's Database.
    The session is closed once the response has been produced.
    """
    yield from request.app.state.database.session()


async def get_json_body(request: Request) -> Dict[str, Any]:
    """Request body as a JSON object; an empty body is rejected."""
    return decode_json_body(await request.body())


async def get_patch_body(request: Request) -> Dict[str, Any]:
    """Request body as a JSON object; an empty body means no changes."""
    return decode_json_body(await request.body(), allow_empty=True)


def get_student_id(student_id: str) -> int:
    """Numeric ``{student_id}`` path segment."""
    return parse_student_id(student_id)
