from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


def describe_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """Collapse pydantic error entries into one client-facing message.

    A body that does not decode into the payload model, whether malformed or
    carrying a field of the wrong type or range, is reported as invalid JSON.
    """
    messages = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if error.get("type") == "json_invalid" or loc[:1] == ("body",):
            return "invalid JSON"
        location = ".".join(str(item) for item in loc if item != "query")
        message = error.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": describe_validation_errors(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
