from .base import AppError, DomainError, UnauthorizedError
from .http import NOT_FOUND_MESSAGE, handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "NOT_FOUND_MESSAGE",
    "UnauthorizedError",
    "handle_app_error",
    "register_error_handler",
]
