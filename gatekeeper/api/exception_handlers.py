"""Exception handlers for FastAPI apps that use the gatekeeper route guards.

Register with register_exception_handlers(app). Maps GatekeeperException
error codes to HTTP responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gatekeeper.domain.exceptions import GatekeeperException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "PERMISSION_DENIED": 403,
    "INVALID_ARGUMENT": 400,
    "RESOURCE_NOT_FOUND": 404,
    "CONFIGURATION_ERROR": 500,
}


def status_for(exc: GatekeeperException) -> int:
    """Return the HTTP status for a gatekeeper error (400 when unmapped)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _gatekeeper_exception_handler(
    request: Request, exc: GatekeeperException
) -> JSONResponse:
    """Return JSON from GatekeeperException.to_dict() with the mapped status code."""
    status = status_for(exc)
    if status >= 500:
        logger.error("Gatekeeper misconfiguration on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Register the GatekeeperException handler (covers all subclasses)."""
    app.add_exception_handler(GatekeeperException, _gatekeeper_exception_handler)
