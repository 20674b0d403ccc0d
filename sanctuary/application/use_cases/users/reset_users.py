# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sanctuary.domain.users.repositories import UserRepository
from sanctuary.shared.errors import ResetNotAllowedError


class ResetUsersUseCase:
    def __init__(self, *, users: UserRepository, dev_platform: bool) -> None:
        self._users = users
        self._dev_platform = dev_platform

    def execute(self) -> int:
        if not self._dev_platform:
            raise ResetNotAllowedError()
        return self._users.delete_all()
