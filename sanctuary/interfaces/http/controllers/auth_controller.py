# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from sanctuary.application.use_cases.users.login_user import LoginUserUseCase
from sanctuary.application.use_cases.users.register_user import RegisterUserUseCase
from sanctuary.interfaces.http.dto.auth import LoginRequestDTO, RegisterRequestDTO
from sanctuary.interfaces.http.dto.users import UserWithTokenDTO
from sanctuary.shared.errors.validation import raise_validation_error
from sanctuary.shared.logging import logger
from sanctuary.shared.middleware.rate_limit import rate_limit


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    @rate_limit(limit=5, window_seconds=60.0)
    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._register_use_case.execute(dto.email, dto.password)

        payload = UserWithTokenDTO.from_domain_with_token(user, token).model_dump(mode="json")
        return jsonify(payload), HTTPStatus.CREATED

    @rate_limit()
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._login_use_case.execute(dto.email, dto.password)

        payload = UserWithTokenDTO.from_domain_with_token(user, token).model_dump(mode="json")
        logger.info(f"auth.login: ok user_id={user.id}")
        return jsonify(payload), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
