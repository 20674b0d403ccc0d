# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify
from sqlalchemy.exc import SQLAlchemyError

from sanctuary.application.use_cases.users.reset_users import ResetUsersUseCase
from sanctuary.infrastructure.health import check_database
from sanctuary.shared.logging import logger


class MiscController:
    """Service endpoints: liveness and the dev-only data reset."""

    def __init__(self, *, reset_use_case: ResetUsersUseCase) -> None:
        self._reset_use_case = reset_use_case

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__, url_prefix="/api")
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        bp.add_url_rule("/reset", view_func=self.reset, methods=["POST"])
        return bp

    def health(self) -> tuple[Response, int]:
        try:
            database = check_database()
        except SQLAlchemyError as exc:
            logger.error(f"health: database unreachable ({type(exc).__name__})")
            payload = {"ok": False, "database": "error"}
            return jsonify(payload), HTTPStatus.SERVICE_UNAVAILABLE

        return jsonify({"ok": True, "database": "ok", **database}), HTTPStatus.OK

    def reset(self) -> tuple[Response, int]:
        deleted = self._reset_use_case.execute()
        logger.warning(f"reset: removed {deleted} accounts")
        return jsonify({"ok": True, "deleted_users": deleted}), HTTPStatus.OK
