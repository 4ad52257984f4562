# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tailorshop.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from tailorshop.domain.users.repositories import PasswordHasher, UserRepository
from tailorshop.shared.logging import logger


class ChangePasswordUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, user_id: int, *, current_password: str, new_password: str) -> None:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if not self._password_hasher.verify(current_password, user.password_hash):
            raise InvalidCredentialsError()

        self._users.set_password_hash(user_id, self._password_hasher.hash(new_password))
        logger.info(f"users.password: changed user_id={user_id}")
