# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from tailorshop.domain.users.entities import TokenClaims
from tailorshop.domain.users.exceptions import InvalidTokenSignatureError, TokenExpiredError
from tailorshop.domain.users.repositories import TokenService

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    """Stateless signed tokens; nothing is stored on the server.

    Expiry is checked against the injected clock instead of PyJWT's own,
    so tests can move time without sleeping.
    """

    def __init__(
        self,
        *,
        secret: str,
        ttl: timedelta,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: int) -> str:
        now = self._clock()
        payload = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": _REQUIRED_CLAIMS,
                },
            )
            user_id = int(payload["sub"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
        except (jwt.PyJWTError, ValueError, TypeError) as exc:
            raise InvalidTokenSignatureError() from exc

        if self._clock() >= expires_at:
            raise TokenExpiredError()

        return TokenClaims(user_id=user_id, issued_at=issued_at, expires_at=expires_at)
