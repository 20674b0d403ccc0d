# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from collections.abc import Mapping
from datetime import datetime
from functools import wraps

from flask import current_app, g, request

from sanctuary.application.services.bearer import extract_bearer_token
from sanctuary.application.services.password_hashing import hash_password, verify_password
from sanctuary.application.services.tokens import issue_token, validate_token
from sanctuary.domain.auth.errors import AuthError
from sanctuary.shared.errors import UnauthorizedError
from sanctuary.shared.logging import logger

TOKEN_SECRET_CONFIG_KEY = "TOKEN_SECRET"


def authenticate(headers: Mapping[str, str], secret: str, *, now: datetime | None = None) -> int:
    """Recover and verify the caller's account id from request headers."""
    token = extract_bearer_token(headers)
    return validate_token(token, secret, now=now)


def current_user_id() -> int:
    return int(g.user_id)


def auth_required(f):
    @wraps(f)
    def inner(*a, **kw):
        secret = current_app.config.get(TOKEN_SECRET_CONFIG_KEY, "")
        try:
            user_id = authenticate(request.headers, secret)
        except AuthError as exc:
            logger.warning(
                f"Auth failed ({exc.kind}) on {request.method} {request.path} "
                f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
            )
            raise UnauthorizedError() from exc

        g.user_id = user_id
        logger.debug(f"Auth OK: user={user_id} {request.method} {request.path}")
        return f(*a, **kw)

    return inner


__all__ = [
    "auth_required",
    "authenticate",
    "current_user_id",
    "extract_bearer_token",
    "hash_password",
    "issue_token",
    "validate_token",
    "verify_password",
]
