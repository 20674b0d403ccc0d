# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .errors import (
    AuthError,
    AuthErrorKind,
    BearerTokenError,
    CredentialError,
    TokenIssueError,
    TokenValidationError,
)

__all__ = [
    "AuthError",
    "AuthErrorKind",
    "BearerTokenError",
    "CredentialError",
    "TokenIssueError",
    "TokenValidationError",
]
