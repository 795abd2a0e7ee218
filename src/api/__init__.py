"""Festival Match API layer: routes, schemas, auth, and middleware."""

from src.api.admin_routes import admin_router
from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    register_exception_handlers,
)
from src.api.routes import router
from src.api.schemas import ErrorResponse, HealthResponse

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "admin_router",
    "configure_cors",
    "register_exception_handlers",
    "router",
    "ErrorResponse",
    "HealthResponse",
]
