# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import g, request

from tailorshop.application.use_cases.users.authenticate_user import AuthenticateRequestUseCase
from tailorshop.domain.users.entities import User
from tailorshop.shared.errors import AppError
from tailorshop.shared.logging import logger


class BearerAuth:
    def __init__(self, authenticate: AuthenticateRequestUseCase) -> None:
        self._authenticate = authenticate

    def required(self, f: Callable) -> Callable:
        @wraps(f)
        def inner(*args, **kwargs):
            try:
                user = self._authenticate.execute(request.headers.get("Authorization"))
            except AppError:
                logger.warning(
                    f"Auth failed on {request.method} {request.path} "
                    f"from {request.remote_addr}"
                )
                raise
            g.user_id = user.id
            g.user = user
            return f(*args, **kwargs)

        return inner


def current_user_id() -> int:
    """Id of the caller bound by :meth:`BearerAuth.required`."""
    return int(g.user_id)


def current_user() -> User:
    return g.user
