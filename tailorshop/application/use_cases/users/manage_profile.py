# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tailorshop.domain.users.entities import User
from tailorshop.domain.users.exceptions import DuplicateIdentityError, UserNotFoundError
from tailorshop.domain.users.repositories import UserRepository
from tailorshop.shared.logging import logger


class GetProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user


class UpdateProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(
        self,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> User:
        if self._users.find_by_id(user_id) is None:
            raise UserNotFoundError(user_id)

        for identity in ({"email": email, "phone": None}, {"email": None, "phone": phone}):
            if not any(identity.values()):
                continue
            other = self._users.find_by_identity(**identity)
            if other is not None and other.id != user_id:
                raise DuplicateIdentityError()

        user = self._users.update(user_id, name=name, email=email, phone=phone)
        logger.info(f"users.profile: updated user_id={user_id}")
        return user


class DeleteProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> None:
        if self._users.find_by_id(user_id) is None:
            raise UserNotFoundError(user_id)
        self._users.delete(user_id)
        logger.info(f"users.profile: deleted user_id={user_id}")
