# app/errors.py
import logging
import traceback
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .models import ApiErrorResponse


logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "An error occurred. Please try again later."
GENERIC_DETAILS = "Internal Server Error"
MISSING_BODY_MESSAGE = "Book data is required"


def error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    body = ApiErrorResponse(status_code=status_code, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def format_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """Flatten pydantic errors into ``field: reason`` fragments."""
    parts: List[str] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        if err.get("type") == "missing" and not loc:
            parts.append(MISSING_BODY_MESSAGE)
            continue
        msg = str(err.get("msg", "Invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI, show_details: bool) -> None:
    """Attach the validation handler and the catch-all error middleware.

    ``show_details`` selects the development envelope (real message and
    traceback) over the production one (fixed generic text).
    """

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        message = format_validation_errors(exc.errors())
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.middleware("http")
    async def _unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled exception caught by middleware: %s", exc)
            if show_details:
                details = "".join(
                    traceback.format_exception(type(exc), exc, exc.__traceback__)
                )
                return error_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), details
                )
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_MESSAGE, GENERIC_DETAILS
            )
