# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from tailorshop.shared.config import SecurityConfig

DEFAULT_TTL = timedelta(days=7)
LOGIN_PATH = "/login"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class ClientSession:
    """Bearer token held like a browser cookie: fixed lifetime, explicit flags.

    redirect_to is set when the server rejects the token, telling the
    caller where the user should be sent next.
    """

    token: str | None = None
    expires_at: datetime | None = None
    secure: bool = False
    samesite: str = "Strict"
    redirect_to: str | None = None
    ttl: timedelta = DEFAULT_TTL
    clock: Callable[[], datetime] = field(default=_utcnow, repr=False)

    @classmethod
    def from_security(cls, security: SecurityConfig, **kwargs) -> ClientSession:
        return cls(secure=security.cookie_secure, samesite=security.cookie_samesite, **kwargs)

    def start(self, token: str) -> None:
        self.token = token
        self.expires_at = self.clock() + self.ttl
        self.redirect_to = None

    def clear(self, *, redirect_to: str | None = None) -> None:
        self.token = None
        self.expires_at = None
        self.redirect_to = redirect_to

    def bearer(self) -> str | None:
        if self.token is None:
            return None
        if self.expires_at is not None and self.clock() >= self.expires_at:
            # Cookie ran out client-side
            self.clear()
            return None
        return self.token

    @property
    def is_authenticated(self) -> bool:
        return self.bearer() is not None
