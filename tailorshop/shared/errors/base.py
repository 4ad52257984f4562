# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Closed set of failure classes understood by the transport layer."""

    VALIDATION = "validation"
    DUPLICATE_IDENTITY = "duplicate_identity"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


@dataclass(slots=True, eq=False)
class AppError(Exception):
    kind: ErrorKind
    code: str
    message: str
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        message: str = "Request data is invalid",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            kind=ErrorKind.VALIDATION,
            code=code,
            message=message,
            context=context,
        )


class NotFoundError(AppError):
    def __init__(self, resource: str, resource_id: int | str | None = None) -> None:
        context = None
        if resource_id is not None:
            context = {"id": resource_id}
        super().__init__(
            kind=ErrorKind.NOT_FOUND,
            code=f"{resource}_not_found",
            message=f"{resource.replace('_', ' ').capitalize()} not found",
            context=context,
        )


class RateLimitedError(AppError):
    def __init__(self, retry_after: float) -> None:
        super().__init__(
            kind=ErrorKind.RATE_LIMITED,
            code="rate_limited",
            message="Too many requests, please slow down",
            context={"retry_after_seconds": round(retry_after, 1)},
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "internal_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            kind=ErrorKind.INTERNAL,
            code=code,
            message="Something went wrong on our side",
            context=context,
        )
