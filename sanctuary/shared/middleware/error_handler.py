# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask
from werkzeug.exceptions import MethodNotAllowed, NotFound

from sanctuary.shared.errors import error_response, register_error_handler


def configure_error_handling(app: Flask) -> None:
    register_error_handler(app)

    # Routing errors get the same JSON envelope as application errors.
    @app.errorhandler(NotFound)
    def _not_found(_exc: NotFound):
        return error_response("not_found", HTTPStatus.NOT_FOUND)

    @app.errorhandler(MethodNotAllowed)
    def _method_not_allowed(_exc: MethodNotAllowed):
        return error_response("method_not_allowed", HTTPStatus.METHOD_NOT_ALLOWED)
