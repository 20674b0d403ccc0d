# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contextlib import suppress

from sanctuary.application.services.password_hashing import DUMMY_PASSWORD_HASH
from sanctuary.domain.auth.errors import CredentialError
from sanctuary.domain.users.entities import User
from sanctuary.domain.users.exceptions import InvalidCredentialsError
from sanctuary.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from sanctuary.shared.logging import logger


class LoginUserUseCase:
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
        user = self._users.find_by_email(email)
        if user is None:
            # Same hashing cost as a wrong password.
            with suppress(CredentialError):
                self._password_hasher.verify(password, DUMMY_PASSWORD_HASH)
            raise InvalidCredentialsError()

        try:
            self._password_hasher.verify(password, user.password_hash)
        except CredentialError as exc:
            logger.info(f"auth.login: rejected user_id={user.id} reason={exc.kind}")
            raise InvalidCredentialsError() from exc

        return user, self._tokens.issue(user.id)
