from .base import (
    AppError,
    BadRequestError,
    DomainError,
    InfrastructureError,
    TemplateNotFoundError,
)
from .http import client_error, handle_app_error, not_found, register_error_handler, server_error
from .validation import InvalidDecoderError, decode_post_form

__all__ = [
    "AppError",
    "BadRequestError",
    "DomainError",
    "InfrastructureError",
    "InvalidDecoderError",
    "TemplateNotFoundError",
    "client_error",
    "decode_post_form",
    "handle_app_error",
    "not_found",
    "register_error_handler",
    "server_error",
]
