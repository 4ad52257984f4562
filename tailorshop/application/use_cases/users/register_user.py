# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tailorshop.domain.users.entities import User
from tailorshop.domain.users.exceptions import DuplicateIdentityError
from tailorshop.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from tailorshop.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(
        self,
        *,
        name: str,
        email: str | None,
        phone: str | None,
        password: str,
    ) -> tuple[User, str]:
        # Fast path only; the unique constraints in the store decide races
        if self._users.find_by_identity(email=email, phone=phone):
            raise DuplicateIdentityError()

        hashed = self._password_hasher.hash(password)
        user = self._users.add(name=name, email=email, phone=phone, password_hash=hashed)
        token = self._tokens.issue(user.id)
        logger.info(f"users.register: created user_id={user.id}")
        return user, token
