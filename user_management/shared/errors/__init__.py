from .base import (
    AppError,
    ConfigurationError,
    DomainError,
    InfrastructureError,
    PersistenceError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "ConfigurationError",
    "DomainError",
    "InfrastructureError",
    "PersistenceError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
