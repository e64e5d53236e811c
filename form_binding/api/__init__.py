"""API layer package for FastAPI request binding integration."""

from .dependencies import api_bind_form, api_bind_query
from .errors import api_register_binding_error_handler

__all__ = ["api_bind_form", "api_bind_query", "api_register_binding_error_handler"]
