# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError

from tailorshop.domain.users.entities import User as DomainUser
from tailorshop.domain.users.exceptions import DuplicateIdentityError, UserNotFoundError
from tailorshop.domain.users.repositories import UserRepository
from tailorshop.infrastructure.db.mapping import as_utc, as_utc_optional
from tailorshop.infrastructure.db.models import User
from tailorshop.infrastructure.db.session import SessionFactory, session_scope
from tailorshop.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        phone=row.phone,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
        last_login_at=as_utc_optional(row.last_login_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def find_by_identity(self, *, email: str | None, phone: str | None) -> DomainUser | None:
        conditions = []
        if email:
            conditions.append(User.email == email)
        if phone:
            conditions.append(User.phone == phone)
        if not conditions:
            return None

        with session_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(or_(*conditions)).limit(1)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(
        self,
        *,
        name: str,
        email: str | None,
        phone: str | None,
        password_hash: str,
    ) -> DomainUser:
        try:
            with session_scope(self._session_factory) as session:
                row = User(
                    name=name,
                    email=email,
                    phone=phone,
                    password_hash=password_hash,
                    created_at=datetime.now(UTC),
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            logger.info("users.store: identity already taken")
            raise DuplicateIdentityError() from exc

    def update(
        self,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> DomainUser:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                if row is None:
                    raise UserNotFoundError(user_id)
                if name is not None:
                    row.name = name
                if email is not None:
                    row.email = email
                if phone is not None:
                    row.phone = phone
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise DuplicateIdentityError() from exc

    def set_password_hash(self, user_id: int, password_hash: str) -> None:
        with session_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if row is None:
                raise UserNotFoundError(user_id)
            row.password_hash = password_hash

    def touch_last_login(self, user_id: int) -> DomainUser:
        with session_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if row is None:
                raise UserNotFoundError(user_id)
            row.last_login_at = datetime.now(UTC)
            session.flush()
            return _to_domain(row)

    def delete(self, user_id: int) -> None:
        with session_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if row is not None:
                # ORM cascade removes the user's requisitions as well
                session.delete(row)
