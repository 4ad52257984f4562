# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any


class ClientError(Exception):
    """Base for every failure surfaced by :class:`ApiClient`."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NetworkError(ClientError):
    def __init__(
        self,
        message: str = "Unable to connect to server. Please check if the backend is running.",
    ) -> None:
        super().__init__(message)


class RequestTimeoutError(NetworkError):
    def __init__(self, timeout: float) -> None:
        super().__init__(f"Server did not respond within {timeout:g}s")
        self.timeout = timeout


class ApiError(ClientError):
    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.context = context or {}


class ServerError(ApiError):
    def __init__(self, status_code: int, details: Any = None) -> None:
        super().__init__(
            status_code,
            "server_error",
            "Server error occurred. Please try again later.",
        )
        self.details = details


class SessionExpiredError(ApiError):
    def __init__(
        self,
        code: str = "unauthorized",
        message: str = "Session expired, please log in",
    ) -> None:
        super().__init__(401, code, message)
