"""Exception handler mapping binding failures to JSON error responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from form_binding.binding import BindingError
from form_binding.config import BindingSettings

logger = logging.getLogger(__name__)


def api_register_binding_error_handler(application: FastAPI, settings: BindingSettings) -> None:
    """Register the binding error handler on one application.

    Args:
        application: FastAPI application receiving the handler.
        settings: Settings providing the error status code.

    Returns:
        None: The handler is registered as a side effect.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if application is None:
        raise ValueError("application must not be None")
    if settings is None:
        raise ValueError("settings must not be None")

    @application.exception_handler(BindingError)
    async def api_binding_error_handler(request: Request, error: BindingError) -> JSONResponse:
        """Return a deterministic error payload for one rejected binding."""

        logger.info("rejected %s %s binding: %s", request.method, request.url.path, error)
        payload = {
            "status": "error",
            "message": str(error),
            "field": error.field_name,
        }
        return JSONResponse(content=payload, status_code=settings.api_error_status_code)
