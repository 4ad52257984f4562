# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .api_client import ApiClient
from .errors import (
    ApiError,
    ClientError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
    SessionExpiredError,
)
from .session import ClientSession

__all__ = [
    "ApiClient",
    "ApiError",
    "ClientError",
    "ClientSession",
    "NetworkError",
    "RequestTimeoutError",
    "ServerError",
    "SessionExpiredError",
]
