"""Exception handlers that give every error response the same JSON shape."""
from http import HTTPStatus
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


def error_body(status_code: int, message: Any) -> dict[str, Any]:
    """
    Build an error body: `{"statusCode", "message", "error"}`.

    `error` is the HTTP reason phrase, omitted when the message already is the
    reason phrase (e.g. a bare 401 is `{"statusCode": 401, "message": "Unauthorized"}`).
    """
    body: dict[str, Any] = {"statusCode": status_code, "message": message}
    phrase = HTTPStatus(status_code).phrase
    if message != phrase:
        body["error"] = phrase
    return body


def format_validation_errors(exc: RequestValidationError) -> list[str]:
    """Flatten pydantic errors into `"<field>: <msg>"` strings."""
    messages = []
    for err in exc.errors():
        loc = err.get("loc", ["unknown"])
        field = loc[-1] if loc else "unknown"
        messages.append(f"{field}: {err.get('msg', 'invalid')}")
    return messages


async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    """Render HTTPException with the shared error body."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.detail),
        headers=exc.headers,
    )


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report request validation failures as 400 with field-level detail."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(status.HTTP_400_BAD_REQUEST, format_validation_errors(exc)),
    )
