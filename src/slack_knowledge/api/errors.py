"""Exception handlers: request validation -> 400 with field-level detail."""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Location prefixes that carry no information for the client
_LOCATION_ROOTS = {"body", "query", "path", "header"}


def _field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc if part not in _LOCATION_ROOTS]
    return ".".join(parts) or "body"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Convert FastAPI's 422 validation error into a 400 listing each bad field."""
    errors = [
        {
            "field": _field_name(tuple(error.get("loc", ()))),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=400, content={"errors": errors})
