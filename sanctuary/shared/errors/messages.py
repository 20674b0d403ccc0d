# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

CLIENT_MESSAGES: dict[str, str] = {
    "unauthorized": "You are not authorized to perform this action. Please log in again.",
    "invalid_credentials": "Incorrect email or password. Please try again.",
    "user_already_exists": "An account with this email already exists.",
    "user_not_found": "The requested account does not exist.",
    "validation_error": "The request is invalid. Please check the submitted fields.",
    "reset_not_allowed": "You can only reset data in dev mode.",
    "rate_limited": "Too many attempts. Please wait and try again.",
    "not_found": "The requested resource was not found.",
    "method_not_allowed": "This method is not allowed for the requested resource.",
    "database_unavailable": "The service is temporarily unavailable. Please try again later.",
    "internal_error": "Something went wrong. Please try again.",
}


def client_message(code: str) -> str | None:
    return CLIENT_MESSAGES.get(code)


__all__ = ["CLIENT_MESSAGES", "client_message"]
