# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless access tokens.

Tokens are compact JWTs signed with HMAC-SHA256. They carry exactly four
claims (``iss``, ``sub``, ``iat``, ``exp``) and are never stored: validity is
decided from the signed content and the current time alone.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.utils import base64url_decode, base64url_encode

from sanctuary.domain.auth.errors import AuthErrorKind, TokenIssueError, TokenValidationError
from sanctuary.domain.users.repositories import TokenIssuer

TOKEN_ISSUER = "sanctuary"
SIGNING_ALGORITHM = "HS256"
HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})

_DECIMAL_ID = re.compile(r"[0-9]+")

# Signature only. Time-based and subject checks run below against our own clock.
_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


def issue_token(
    account_id: int,
    secret: str,
    ttl: timedelta,
    *,
    now: datetime | None = None,
) -> str:
    if isinstance(account_id, bool) or not isinstance(account_id, int) or account_id <= 0:
        raise TokenIssueError(AuthErrorKind.INVALID_PRINCIPAL)
    if not secret:
        raise TokenIssueError(AuthErrorKind.MISSING_SECRET)

    issued_at = int((now or _utcnow()).timestamp())
    claims: dict[str, Any] = {
        "iss": TOKEN_ISSUER,
        "sub": str(account_id),
        "iat": issued_at,
        "exp": issued_at + int(ttl.total_seconds()),
    }
    try:
        return jwt.encode(claims, secret, algorithm=SIGNING_ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError) as exc:
        raise TokenIssueError(AuthErrorKind.SIGNING_FAILURE) from exc


def _decoded_segments(token: str) -> tuple[dict[str, Any], str]:
    """Decode header, payload and signature without trusting any of them.

    Returns the header and the raw signature segment.
    """
    if not isinstance(token, str) or token.count(".") != 2:
        raise TokenValidationError(AuthErrorKind.MALFORMED)

    header_segment, payload_segment, signature_segment = token.split(".")
    try:
        header = json.loads(base64url_decode(header_segment))
        payload = json.loads(base64url_decode(payload_segment))
        base64url_decode(signature_segment)
    except ValueError as exc:
        raise TokenValidationError(AuthErrorKind.MALFORMED) from exc

    if not isinstance(header, dict) or not isinstance(payload, dict):
        raise TokenValidationError(AuthErrorKind.MALFORMED)
    return header, signature_segment


def _declared_algorithm(header: dict[str, Any]) -> str:
    algorithm = header.get("alg")
    if not isinstance(algorithm, str) or algorithm not in HMAC_ALGORITHMS:
        raise TokenValidationError(AuthErrorKind.ALGORITHM_MISMATCH)
    return algorithm


def _require_canonical_signature(signature_segment: str) -> None:
    # Unused trailing bits would let several encodings share one MAC.
    canonical = base64url_encode(base64url_decode(signature_segment))
    if canonical != signature_segment.encode("ascii"):
        raise TokenValidationError(AuthErrorKind.BAD_SIGNATURE)


def _verified_claims(token: str, secret: str, algorithm: str) -> dict[str, Any]:
    try:
        return jwt.decode(token, secret, algorithms=[algorithm], options=_DECODE_OPTIONS)
    except jwt.InvalidSignatureError as exc:
        raise TokenValidationError(AuthErrorKind.BAD_SIGNATURE) from exc
    except jwt.PyJWTError as exc:
        raise TokenValidationError(AuthErrorKind.MALFORMED) from exc


def _subject_id(claims: dict[str, Any]) -> int:
    subject = claims.get("sub")
    if not isinstance(subject, str) or not _DECIMAL_ID.fullmatch(subject):
        raise TokenValidationError(AuthErrorKind.INVALID_SUBJECT)
    account_id = int(subject)
    if account_id <= 0:
        raise TokenValidationError(AuthErrorKind.INVALID_SUBJECT)
    return account_id


def validate_token(token: str, secret: str, *, now: datetime | None = None) -> int:
    """Return the account id carried by ``token``.

    Checks run in order (structure, algorithm, signature, expiry, subject)
    and the first failure is raised as a ``TokenValidationError``.
    """
    if not secret:
        raise TokenValidationError(AuthErrorKind.MALFORMED)

    header, signature_segment = _decoded_segments(token)
    algorithm = _declared_algorithm(header)
    _require_canonical_signature(signature_segment)
    claims = _verified_claims(token, secret, algorithm)

    expires_at = claims.get("exp")
    if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
        raise TokenValidationError(AuthErrorKind.MALFORMED)
    if expires_at <= (now or _utcnow()).timestamp():
        raise TokenValidationError(AuthErrorKind.EXPIRED)

    return _subject_id(claims)


class JwtTokenCodec(TokenIssuer):
    def __init__(
        self,
        *,
        secret: str,
        ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: int) -> str:
        return issue_token(user_id, self._secret, self._ttl, now=self._clock())

    def validate(self, token: str) -> int:
        return validate_token(token, self._secret, now=self._clock())


__all__ = [
    "HMAC_ALGORITHMS",
    "JwtTokenCodec",
    "SIGNING_ALGORITHM",
    "TOKEN_ISSUER",
    "issue_token",
    "validate_token",
]
