# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sanctuary.domain.users.entities import User
from sanctuary.domain.users.exceptions import UserAlreadyExistsError
from sanctuary.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from sanctuary.shared.logging import logger


class RegisterUserUseCase:
    """Create an account and hand back a token for it.

    The repository enforces e-mail uniqueness too, so a concurrent duplicate
    still surfaces as ``UserAlreadyExistsError``.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenIssuer,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> tuple[User, str]:
        if self._users.find_by_email(email) is not None:
            raise UserAlreadyExistsError()

        created_at = datetime.now(UTC)
        draft = User(
            id=0,
            email=email,
            password_hash=self._password_hasher.hash(password),
            created_at=created_at,
            updated_at=created_at,
        )
        user = self._users.add(draft)
        logger.info(f"auth.register: created user_id={user.id}")
        return user, self._tokens.issue(user.id)
