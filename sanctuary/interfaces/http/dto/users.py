# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from sanctuary.domain.users.entities import ProfileUpdate, User


class UpdateProfileRequestDTO(BaseModel):
    full_name: str = Field(min_length=1, max_length=128)
    user_name: str = Field(min_length=1, max_length=64)
    dob: date

    @field_validator("full_name", "user_name")
    @classmethod
    def strip_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Field cannot be blank")
        return value

    def to_domain(self) -> ProfileUpdate:
        return ProfileUpdate(full_name=self.full_name, user_name=self.user_name, dob=self.dob)


class UserDTO(BaseModel):
    id: int
    email: str
    user_name: str
    full_name: str
    profile_image_url: str
    dob: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserDTO":
        return cls(
            id=user.id,
            email=user.email,
            user_name=user.user_name,
            full_name=user.full_name,
            profile_image_url=user.profile_image_url or "",
            dob=user.dob.isoformat() if user.dob else "",
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserWithTokenDTO(UserDTO):
    access_token: str

    @classmethod
    def from_domain_with_token(cls, user: User, token: str) -> "UserWithTokenDTO":
        return cls(**UserDTO.from_domain(user).model_dump(), access_token=token)
