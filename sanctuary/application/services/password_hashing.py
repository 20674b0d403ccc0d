"""Password hashing.

Hashes are produced by werkzeug with a fixed scrypt cost (N=2**15, r=8, p=1)
and a random 16 character salt. The resulting string embeds the method, the
cost parameters and the salt, so it is self-contained and verification never
needs any other input than the plaintext.
"""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from sanctuary.domain.auth.errors import AuthErrorKind, CredentialError
from sanctuary.domain.users.repositories import PasswordHasher

PASSWORD_HASH_METHOD = "scrypt:32768:8:1"
PASSWORD_SALT_LENGTH = 16

# Well-formed scrypt hash that matches no password.
DUMMY_PASSWORD_HASH = f"{PASSWORD_HASH_METHOD}$UnknownAccount00${'0' * 128}"


def hash_password(plaintext: str) -> str:
    if not plaintext:
        raise CredentialError(AuthErrorKind.EMPTY_INPUT)
    return str(
        generate_password_hash(
            plaintext, method=PASSWORD_HASH_METHOD, salt_length=PASSWORD_SALT_LENGTH
        )
    )


def verify_password(password_hash: str, plaintext: str) -> None:
    """Raise ``CredentialError`` unless ``plaintext`` matches ``password_hash``.

    A corrupt or unsupported hash is reported exactly like a wrong password.
    """
    if not password_hash or not plaintext:
        raise CredentialError(AuthErrorKind.EMPTY_INPUT)
    try:
        matches = check_password_hash(password_hash, plaintext)
    except (ValueError, OverflowError, TypeError):
        matches = False
    if not matches:
        raise CredentialError(AuthErrorKind.MISMATCH)


class WerkzeugPasswordHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return hash_password(password)

    def verify(self, password: str, hashed: str) -> None:
        verify_password(hashed, password)


__all__ = [
    "DUMMY_PASSWORD_HASH",
    "PASSWORD_HASH_METHOD",
    "WerkzeugPasswordHasher",
    "hash_password",
    "verify_password",
]
