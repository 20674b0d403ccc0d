# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum
from http import HTTPStatus
from typing import Any

from sanctuary.shared.errors.base import DomainError


class AuthErrorKind(StrEnum):
    EMPTY_INPUT = "empty_input"
    MISMATCH = "mismatch"

    INVALID_PRINCIPAL = "invalid_principal"
    MISSING_SECRET = "missing_secret"
    SIGNING_FAILURE = "signing_failure"

    MALFORMED = "malformed"
    ALGORITHM_MISMATCH = "algorithm_mismatch"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
    INVALID_SUBJECT = "invalid_subject"

    MISSING_HEADER = "missing_header"
    BAD_SCHEME = "bad_scheme"
    EMPTY_TOKEN = "empty_token"


class AuthError(DomainError):
    """Base for every authentication failure.

    ``code`` carries the precise kind for logs and tests. ``to_dict`` only
    exposes ``public_code`` so clients cannot tell the failure modes apart.
    """

    kinds: frozenset[AuthErrorKind] = frozenset()
    public_code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED

    def __init__(self, kind: AuthErrorKind) -> None:
        if self.kinds and kind not in self.kinds:
            raise ValueError(f"{type(self).__name__} cannot carry kind {kind!s}")
        super().__init__(code=kind.value)
        self.kind = kind

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.public_code}


class CredentialError(AuthError):
    kinds = frozenset({AuthErrorKind.EMPTY_INPUT, AuthErrorKind.MISMATCH})
    public_code = "invalid_credentials"


class TokenIssueError(AuthError):
    kinds = frozenset(
        {
            AuthErrorKind.INVALID_PRINCIPAL,
            AuthErrorKind.MISSING_SECRET,
            AuthErrorKind.SIGNING_FAILURE,
        }
    )
    public_code = "internal_error"
    status = HTTPStatus.INTERNAL_SERVER_ERROR


class TokenValidationError(AuthError):
    kinds = frozenset(
        {
            AuthErrorKind.MALFORMED,
            AuthErrorKind.ALGORITHM_MISMATCH,
            AuthErrorKind.BAD_SIGNATURE,
            AuthErrorKind.EXPIRED,
            AuthErrorKind.INVALID_SUBJECT,
        }
    )


class BearerTokenError(AuthError):
    kinds = frozenset(
        {
            AuthErrorKind.MISSING_HEADER,
            AuthErrorKind.BAD_SCHEME,
            AuthErrorKind.EMPTY_TOKEN,
        }
    )


__all__ = [
    "AuthError",
    "AuthErrorKind",
    "BearerTokenError",
    "CredentialError",
    "TokenIssueError",
    "TokenValidationError",
]
