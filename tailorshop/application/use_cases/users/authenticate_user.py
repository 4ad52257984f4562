"""Use-case resolving the caller of a protected request from its bearer token."""

from __future__ import annotations

from tailorshop.domain.users.entities import User
from tailorshop.domain.users.exceptions import TokenError, UnauthorizedError
from tailorshop.domain.users.repositories import TokenService, UserRepository
from tailorshop.shared.logging import logger

_BEARER_PREFIX = "bearer "


def extract_bearer_token(header: str | None) -> str | None:
    if not header or not header.lower().startswith(_BEARER_PREFIX):
        return None
    token = header[len(_BEARER_PREFIX):].strip()
    return token or None


class AuthenticateRequestUseCase:
    def __init__(self, *, users: UserRepository, tokens: TokenService) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, authorization: str | None) -> User:
        token = extract_bearer_token(authorization)
        if token is None:
            raise UnauthorizedError("Not authorized, no token")

        try:
            claims = self._tokens.verify(token)
        except TokenError as exc:
            logger.info(f"auth.token: rejected ({exc.message})")
            raise UnauthorizedError("Not authorized, token failed") from exc

        user = self._users.find_by_id(claims.user_id)
        if user is None:
            logger.info(f"auth.token: user_id={claims.user_id} no longer exists")
            raise UnauthorizedError("Not authorized, token failed")

        return user
