# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import (
    AppError,
    DomainError,
    InfrastructureError,
    ResetNotAllowedError,
    UnauthorizedError,
    ValidationError,
)
from .http import error_response, handle_app_error, register_error_handler
from .messages import CLIENT_MESSAGES, client_message

__all__ = [
    "AppError",
    "CLIENT_MESSAGES",
    "DomainError",
    "InfrastructureError",
    "ResetNotAllowedError",
    "UnauthorizedError",
    "ValidationError",
    "client_message",
    "error_response",
    "handle_app_error",
    "register_error_handler",
]
