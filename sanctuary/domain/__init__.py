# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth import (
    AuthError,
    AuthErrorKind,
    BearerTokenError,
    CredentialError,
    TokenIssueError,
    TokenValidationError,
)
from .users.entities import ProfileUpdate, User
from .users.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "AuthError",
    "AuthErrorKind",
    "BearerTokenError",
    "CredentialError",
    "InvalidCredentialsError",
    "ProfileUpdate",
    "TokenIssueError",
    "TokenValidationError",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
