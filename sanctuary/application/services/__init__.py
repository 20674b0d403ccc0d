# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .bearer import extract_bearer_token
from .password_hashing import WerkzeugPasswordHasher, hash_password, verify_password
from .tokens import JwtTokenCodec, issue_token, validate_token

__all__ = [
    "JwtTokenCodec",
    "WerkzeugPasswordHasher",
    "extract_bearer_token",
    "hash_password",
    "issue_token",
    "validate_token",
    "verify_password",
]
