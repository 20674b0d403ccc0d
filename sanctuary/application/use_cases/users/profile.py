"""Use-cases for reading and editing the caller's own profile."""

from __future__ import annotations

from sanctuary.domain.users.entities import ProfileUpdate, User
from sanctuary.domain.users.exceptions import UserNotFoundError
from sanctuary.domain.users.repositories import TokenIssuer, UserRepository


class GetProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user


class UpdateProfileUseCase:
    def __init__(self, *, users: UserRepository, tokens: TokenIssuer) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, user_id: int, update: ProfileUpdate) -> tuple[User, str]:
        updated = self._users.update_profile(user_id, update)
        if updated is None:
            raise UserNotFoundError()
        return updated, self._tokens.issue(updated.id)
