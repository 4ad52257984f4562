# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tailorshop.shared.errors.base import AppError, ErrorKind, NotFoundError


class DuplicateIdentityError(AppError):
    def __init__(self) -> None:
        super().__init__(
            kind=ErrorKind.DUPLICATE_IDENTITY,
            code="duplicate_identity",
            message="User already exists with this email or phone",
        )


class InvalidCredentialsError(AppError):
    # One message for unknown identity and wrong password
    def __init__(self) -> None:
        super().__init__(
            kind=ErrorKind.INVALID_CREDENTIALS,
            code="invalid_credentials",
            message="Invalid credentials",
        )


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Not authorized, please log in") -> None:
        super().__init__(
            kind=ErrorKind.UNAUTHORIZED,
            code="unauthorized",
            message=message,
        )


class TokenError(UnauthorizedError):
    pass


class InvalidTokenSignatureError(TokenError):
    def __init__(self) -> None:
        super().__init__("Token signature is invalid")


class TokenExpiredError(TokenError):
    def __init__(self) -> None:
        super().__init__("Token has expired")


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int | None = None) -> None:
        super().__init__("user", user_id)
