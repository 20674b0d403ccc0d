# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from sanctuary.domain.users.entities import ProfileUpdate
from sanctuary.domain.users.entities import User as DomainUser
from sanctuary.domain.users.exceptions import UserAlreadyExistsError
from sanctuary.domain.users.repositories import UserRepository
from sanctuary.infrastructure.db.models import User
from sanctuary.infrastructure.db.session import session_scope


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
        updated_at=row.updated_at,
        user_name=row.user_name,
        full_name=row.full_name,
        dob=row.dob,
        profile_image_url=row.profile_image_url,
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            if not row:
                return None
            return _to_domain(row)

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            if not row:
                return None
            return _to_domain(row)

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope() as session:
                row = User(
                    email=user.email,
                    password_hash=user.password_hash,
                    user_name=user.user_name,
                    full_name=user.full_name,
                    dob=user.dob,
                    profile_image_url=user.profile_image_url,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc

    def update_profile(self, user_id: int, update: ProfileUpdate) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            if not row:
                return None
            row.full_name = update.full_name
            row.user_name = update.user_name
            row.dob = update.dob
            row.updated_at = datetime.now(UTC)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def delete_all(self) -> int:
        with session_scope() as session:
            result = session.execute(delete(User))
            return int(result.rowcount or 0)
