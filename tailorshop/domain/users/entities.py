# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from tailorshop.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    email: str | None
    phone: str | None
    password_hash: str
    created_at: datetime
    last_login_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.email and not self.phone:
            raise InvariantViolation("Either email or phone is required", field="email")

    def matches_identity(self, *, email: str | None, phone: str | None) -> bool:
        return bool((email and email == self.email) or (phone and phone == self.phone))


@dataclass(slots=True, frozen=True)
class TokenClaims:

    user_id: int
    issued_at: datetime
    expires_at: datetime
