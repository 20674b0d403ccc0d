# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from sanctuary.application.use_cases.users.profile import GetProfileUseCase, UpdateProfileUseCase
from sanctuary.auth import auth_required, current_user_id
from sanctuary.interfaces.http.dto.users import UpdateProfileRequestDTO, UserDTO, UserWithTokenDTO
from sanctuary.shared.errors.validation import raise_validation_error
from sanctuary.shared.logging import logger


class UsersController:
    def __init__(
        self,
        *,
        get_profile_use_case: GetProfileUseCase,
        update_profile_use_case: UpdateProfileUseCase,
    ) -> None:
        self._get_profile = get_profile_use_case
        self._update_profile = update_profile_use_case

    @auth_required
    def me(self) -> tuple[Response, int]:
        user = self._get_profile.execute(current_user_id())
        return jsonify(UserDTO.from_domain(user).model_dump(mode="json")), HTTPStatus.OK

    @auth_required
    def update_me(self) -> tuple[Response, int]:
        try:
            dto = UpdateProfileRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._update_profile.execute(current_user_id(), dto.to_domain())

        logger.info(f"users.update_profile: ok user_id={user.id}")
        payload = UserWithTokenDTO.from_domain_with_token(user, token).model_dump(mode="json")
        return jsonify(payload), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/users")
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule("/me", endpoint="update_me", view_func=self.update_me, methods=["PUT"])
        return bp
