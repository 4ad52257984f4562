from .base import (
    AppError,
    ErrorKind,
    InfrastructureError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler, to_http

__all__ = [
    "AppError",
    "ErrorKind",
    "InfrastructureError",
    "NotFoundError",
    "RateLimitedError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
    "to_http",
]
