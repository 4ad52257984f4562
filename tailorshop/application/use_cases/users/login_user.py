# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tailorshop.domain.users.entities import User
from tailorshop.domain.users.exceptions import InvalidCredentialsError
from tailorshop.domain.users.repositories import PasswordHasher, TokenService, UserRepository


class LoginUserUseCase:
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
        password: str,
        email: str | None = None,
        phone: str | None = None,
    ) -> tuple[User, str]:
        user = self._users.find_by_identity(email=email, phone=phone)
        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash
        )

        if not password_valid:
            raise InvalidCredentialsError()

        user = self._users.touch_last_login(user.id)
        token = self._tokens.issue(user.id)
        return user, token
