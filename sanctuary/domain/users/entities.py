# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    user_name: str = ""
    full_name: str = ""
    dob: date | None = None
    profile_image_url: str | None = None


@dataclass(slots=True, frozen=True)
class ProfileUpdate:

    full_name: str
    user_name: str
    dob: date
