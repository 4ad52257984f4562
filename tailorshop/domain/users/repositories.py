# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import TokenClaims, User


class UserRepository(Protocol):
    def find_by_identity(self, *, email: str | None, phone: str | None) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(
        self,
        *,
        name: str,
        email: str | None,
        phone: str | None,
        password_hash: str,
    ) -> User: ...
    def update(
        self,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> User: ...
    def set_password_hash(self, user_id: int, password_hash: str) -> None: ...
    def touch_last_login(self, user_id: int) -> User: ...
    def delete(self, user_id: int) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, user_id: int) -> str: ...
    def verify(self, token: str) -> TokenClaims: ...
