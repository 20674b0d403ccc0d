# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping

from sanctuary.domain.auth.errors import AuthErrorKind, BearerTokenError

AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "


def _header_value(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case sensitive, werkzeug Headers are not.
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    """Return the raw token from an ``Authorization: Bearer <token>`` header."""
    value = _header_value(headers, AUTHORIZATION_HEADER)
    if not value:
        raise BearerTokenError(AuthErrorKind.MISSING_HEADER)

    if not value.startswith(BEARER_PREFIX):
        raise BearerTokenError(AuthErrorKind.BAD_SCHEME)

    token = value[len(BEARER_PREFIX):].strip()
    if not token:
        raise BearerTokenError(AuthErrorKind.EMPTY_TOKEN)

    return token


__all__ = ["AUTHORIZATION_HEADER", "BEARER_PREFIX", "extract_bearer_token"]
