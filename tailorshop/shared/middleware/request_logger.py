# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from collections.abc import Mapping

from flask import Flask, Response, g, request

from tailorshop.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"

_SECRET_HEADERS = frozenset({"authorization", "cookie", "x-api-key", "x-auth-token"})
_SECRET_PARAM_HINTS = ("password", "token", "secret", "auth")


def _fingerprint(value: str) -> str:
    return "sha256:" + hashlib.sha256(value.encode()).hexdigest()[:8]


def _redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        name: _fingerprint(value) if name.lower() in _SECRET_HEADERS else value
        for name, value in headers.items()
    }


def _redact_params(params: Mapping[str, str]) -> dict[str, str]:
    return {
        name: "<redacted>" if any(hint in name.lower() for hint in _SECRET_PARAM_HINTS) else value
        for name, value in params.items()
    }


def _peer() -> str:
    return request.remote_addr or "unknown"


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """Tags every request with a correlation id and logs its start and outcome.

    The id comes from the caller's ``X-Request-ID`` header when present and is
    echoed back on the response. In debug mode the start line also carries
    query params and headers, with credentials fingerprinted or redacted.
    """

    @app.before_request
    def _start() -> None:
        g.correlation_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(6)
        g.request_started = time.perf_counter()
        set_correlation_id(g.correlation_id)

        line = f"--> {request.method} {request.path} peer={_peer()}"
        if debug_mode:
            line += (
                f" args={_redact_params(request.args)}"
                f" headers={_redact_headers(request.headers)}"
                f" bytes={request.content_length or 0}"
            )
        logger.info(line)

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        line = f"<-- {request.method} {request.path} {response.status_code} in {elapsed_ms:.1f}ms"
        if debug_mode:
            line += f" user={g.get('user_id')}"
        logger.info(line)

        response.headers.setdefault(REQUEST_ID_HEADER, g.get("correlation_id", "-"))
        return response

    @app.teardown_request
    def _cleanup(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"Request aborted by {type(exc).__name__}: {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
