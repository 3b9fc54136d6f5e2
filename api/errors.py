"""Exception handlers for the HTTP API.

Every error is returned as a plain-text body:

- request validation failures (bad JSON, missing fields, non-numeric ids) -> 400
- storage failures (any sqlite3.Error) -> 500 with the database's message
- anything else -> 500
"""

import sqlite3

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from logger import get_logger

logger = get_logger()

PATH_PARAM_MESSAGES = {
    "task_id": "Invalid task ID",
}


def format_validation_error(exc: RequestValidationError) -> str:
    """Turn a validation error into a single line of text."""
    messages = []
    for error in exc.errors():
        loc = error.get("loc", ())
        if loc and loc[0] == "path":
            name = loc[-1]
            return PATH_PARAM_MESSAGES.get(name, f"Invalid {name}")

        field = ".".join(str(part) for part in loc[1:]) or str(loc[0] if loc else "body")
        messages.append(f"{field}: {error.get('msg', 'invalid value')}")

    return "; ".join(messages) or "Invalid request"


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    message = format_validation_error(exc)
    logger.debug(f"Rejected {request.method} {request.url.path}: {message}")
    return PlainTextResponse(message, status_code=400)


async def storage_exception_handler(
    request: Request, exc: sqlite3.Error
) -> PlainTextResponse:
    logger.exception(f"Storage error on {request.method} {request.url.path}: {exc}")
    return PlainTextResponse(str(exc), status_code=500)


async def unexpected_exception_handler(
    request: Request, exc: Exception
) -> PlainTextResponse:
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return PlainTextResponse("Internal Server Error", status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(sqlite3.Error, storage_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
