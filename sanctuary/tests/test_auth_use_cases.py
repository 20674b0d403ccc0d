from __future__ import annotations

from dataclasses import replace
from datetime import UTC, date, datetime, timedelta

import pytest

from sanctuary.application.services.password_hashing import DUMMY_PASSWORD_HASH
from sanctuary.application.services.tokens import JwtTokenCodec
from sanctuary.application.use_cases.users.login_user import LoginUserUseCase
from sanctuary.application.use_cases.users.profile import GetProfileUseCase, UpdateProfileUseCase
from sanctuary.application.use_cases.users.register_user import RegisterUserUseCase
from sanctuary.application.use_cases.users.reset_users import ResetUsersUseCase
from sanctuary.domain.auth.errors import AuthErrorKind, CredentialError
from sanctuary.domain.users.entities import ProfileUpdate, User
from sanctuary.domain.users.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from sanctuary.domain.users.repositories import PasswordHasher, UserRepository
from sanctuary.shared.errors import ResetNotAllowedError

NOW = datetime(2025, 1, 1, tzinfo=UTC)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        new_user = replace(user, id=self._seq)
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def update_profile(self, user_id: int, update: ProfileUpdate) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = replace(
            user, full_name=update.full_name, user_name=update.user_name, dob=update.dob
        )
        self._users[user_id] = updated
        return updated

    def delete_all(self) -> int:
        count = len(self._users)
        self._users.clear()
        return count


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> None:
        if hashed != f"hashed:{password}":
            raise CredentialError(AuthErrorKind.MISMATCH)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def codec() -> JwtTokenCodec:
    return JwtTokenCodec(secret="use-case-secret", ttl=timedelta(hours=1), clock=lambda: NOW)


def _register(users: InMemoryUserRepository, codec: JwtTokenCodec) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, tokens=codec, password_hasher=DeterministicHasher())


def _login(users: InMemoryUserRepository, codec: JwtTokenCodec) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, tokens=codec, password_hasher=DeterministicHasher())


def test_register_user_success(users: InMemoryUserRepository, codec: JwtTokenCodec) -> None:
    user, token = _register(users, codec).execute("alice@example.com", "secret123")

    assert user.id == 1
    assert user.email == "alice@example.com"
    assert user.password_hash == "hashed:secret123"
    assert codec.validate(token) == user.id


def test_register_duplicate_email(users: InMemoryUserRepository, codec: JwtTokenCodec) -> None:
    register = _register(users, codec)
    register.execute("alice@example.com", "secret123")

    with pytest.raises(UserAlreadyExistsError):
        register.execute("alice@example.com", "other")


def test_login_issues_token_for_account(
    users: InMemoryUserRepository, codec: JwtTokenCodec
) -> None:
    registered, _ = _register(users, codec).execute("bob@example.com", "pw")

    user, token = _login(users, codec).execute("bob@example.com", "pw")

    assert user.id == registered.id
    assert codec.validate(token) == registered.id


def test_login_wrong_password(users: InMemoryUserRepository, codec: JwtTokenCodec) -> None:
    _register(users, codec).execute("bob@example.com", "pw")

    with pytest.raises(InvalidCredentialsError) as exc_info:
        _login(users, codec).execute("bob@example.com", "nope")

    assert isinstance(exc_info.value.__cause__, CredentialError)


def test_login_unknown_email(users: InMemoryUserRepository, codec: JwtTokenCodec) -> None:
    with pytest.raises(InvalidCredentialsError):
        _login(users, codec).execute("ghost@example.com", "pw")


def test_get_profile(users: InMemoryUserRepository, codec: JwtTokenCodec) -> None:
    registered, _ = _register(users, codec).execute("carol@example.com", "pw")

    assert GetProfileUseCase(users=users).execute(registered.id) == registered
    with pytest.raises(UserNotFoundError):
        GetProfileUseCase(users=users).execute(999)


def test_update_profile_reissues_token(
    users: InMemoryUserRepository, codec: JwtTokenCodec
) -> None:
    registered, _ = _register(users, codec).execute("carol@example.com", "pw")
    update = ProfileUpdate(full_name="Carol Doe", user_name="carol", dob=date(1990, 5, 17))

    user, token = UpdateProfileUseCase(users=users, tokens=codec).execute(registered.id, update)

    assert (user.full_name, user.user_name, user.dob) == ("Carol Doe", "carol", date(1990, 5, 17))
    assert codec.validate(token) == registered.id


def test_update_profile_unknown_user(
    users: InMemoryUserRepository, codec: JwtTokenCodec
) -> None:
    update = ProfileUpdate(full_name="X", user_name="x", dob=date(2000, 1, 1))

    with pytest.raises(UserNotFoundError):
        UpdateProfileUseCase(users=users, tokens=codec).execute(404, update)


def test_reset_users_on_dev_platform(
    users: InMemoryUserRepository, codec: JwtTokenCodec
) -> None:
    register = _register(users, codec)
    register.execute("a@example.com", "pw")
    register.execute("b@example.com", "pw")

    assert ResetUsersUseCase(users=users, dev_platform=True).execute() == 2
    assert users.find_by_email("a@example.com") is None


def test_reset_users_outside_dev_platform(users: InMemoryUserRepository) -> None:
    with pytest.raises(ResetNotAllowedError):
        ResetUsersUseCase(users=users, dev_platform=False).execute()


class RecordingHasher(DeterministicHasher):
    def __init__(self) -> None:
        self.verified: list[str] = []

    def verify(self, password: str, hashed: str) -> None:
        self.verified.append(hashed)
        super().verify(password, hashed)


def test_login_unknown_email_still_runs_password_check(
    users: InMemoryUserRepository, codec: JwtTokenCodec
) -> None:
    hasher = RecordingHasher()
    login = LoginUserUseCase(users=users, tokens=codec, password_hasher=hasher)

    with pytest.raises(InvalidCredentialsError):
        login.execute("ghost@example.com", "pw")

    assert hasher.verified == [DUMMY_PASSWORD_HASH]
