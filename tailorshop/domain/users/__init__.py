# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import TokenClaims, User
from .exceptions import (
    DuplicateIdentityError,
    InvalidCredentialsError,
    InvalidTokenSignatureError,
    TokenError,
    TokenExpiredError,
    UnauthorizedError,
    UserNotFoundError,
)
from .repositories import PasswordHasher, TokenService, UserRepository

__all__ = [
    "DuplicateIdentityError",
    "InvalidCredentialsError",
    "InvalidTokenSignatureError",
    "PasswordHasher",
    "TokenClaims",
    "TokenError",
    "TokenExpiredError",
    "TokenService",
    "UnauthorizedError",
    "User",
    "UserNotFoundError",
    "UserRepository",
]
