# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sanctuary.application.services.password_hashing import WerkzeugPasswordHasher
from sanctuary.application.services.tokens import JwtTokenCodec
from sanctuary.application.use_cases.users.login_user import LoginUserUseCase
from sanctuary.application.use_cases.users.profile import GetProfileUseCase, UpdateProfileUseCase
from sanctuary.application.use_cases.users.register_user import RegisterUserUseCase
from sanctuary.application.use_cases.users.reset_users import ResetUsersUseCase
from sanctuary.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from sanctuary.interfaces.http.controllers.auth_controller import AuthController
from sanctuary.interfaces.http.controllers.misc_controller import MiscController
from sanctuary.interfaces.http.controllers.users_controller import UsersController
from sanctuary.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_codec(self) -> JwtTokenCodec:
        return JwtTokenCodec(secret=self._config.token_secret, ttl=self._config.token_ttl)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_codec,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_codec,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    @cached_property
    def update_profile_use_case(self) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(users=self.user_repository, tokens=self.token_codec)

    @cached_property
    def reset_users_use_case(self) -> ResetUsersUseCase:
        return ResetUsersUseCase(
            users=self.user_repository,
            dev_platform=self._config.is_dev_platform(),
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            get_profile_use_case=self.get_profile_use_case,
            update_profile_use_case=self.update_profile_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(reset_use_case=self.reset_users_use_case)


container = Container()

__all__ = ["Container", "container"]
