# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

import httpx

from tailorshop.shared.logging import logger

from .errors import ApiError, NetworkError, RequestTimeoutError, ServerError, SessionExpiredError
from .session import LOGIN_PATH, ClientSession

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_TIMEOUT = 10.0

# Only this 401 code means the bearer token itself was rejected; other 401s
# (wrong password on login or change-password) are form errors.
SESSION_REJECTED_CODE = "unauthorized"


class ApiClient:
    """Synchronous client for the tailorshop HTTP API.

    The bearer token lives in the injected :class:`ClientSession`; requests
    are sent once and never retried.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: ClientSession | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
        login_path: str = LOGIN_PATH,
    ) -> None:
        self.session = session or ClientSession()
        self._timeout = timeout
        self._login_path = login_path
        self._http = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # Transport

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {}
        token = self.session.bearer()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self._http.request(method, path, json=json, params=params, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning(f"api_client: {method} {path} timed out after {self._timeout:g}s")
            raise RequestTimeoutError(self._timeout) from exc
        except httpx.TransportError as exc:
            logger.error(f"api_client: {method} {path} network error ({type(exc).__name__})")
            raise NetworkError() from exc

        return self._handle_response(method, path, response)

    def _handle_response(self, method: str, path: str, response: httpx.Response) -> dict[str, Any]:
        status = response.status_code
        body = _json_or_none(response)

        if status < 400:
            return body if isinstance(body, dict) else {}

        if status >= 500:
            logger.error(f"api_client: {method} {path} server error status={status}")
            raise ServerError(status, body)

        code = "http_error"
        message = response.reason_phrase or "Request failed"
        context: dict[str, Any] | None = None
        if isinstance(body, dict):
            code = str(body.get("error") or code)
            message = str(body.get("message") or message)
            context = body.get("context")

        if status == 401 and code == SESSION_REJECTED_CODE:
            logger.info(f"api_client: {method} {path} rejected token, clearing session")
            self.session.clear(redirect_to=self._login_path)
            raise SessionExpiredError(code, message)

        raise ApiError(status, code, message, context)

    # Auth

    def register(
        self,
        *,
        name: str,
        password: str,
        email: str | None = None,
        phone: str | None = None,
    ) -> dict[str, Any]:
        payload = _without_none({"name": name, "email": email, "phone": phone, "password": password})
        data = self._request("POST", "/api/auth/register", json=payload)["data"]
        self.session.start(data["token"])
        return data

    def login(
        self,
        *,
        password: str,
        email: str | None = None,
        phone: str | None = None,
    ) -> dict[str, Any]:
        payload = _without_none({"email": email, "phone": phone, "password": password})
        data = self._request("POST", "/api/auth/login", json=payload)["data"]
        self.session.start(data["token"])
        return data

    def logout(self) -> None:
        self.session.clear(redirect_to=self._login_path)

    def get_profile(self) -> dict[str, Any]:
        return self._request("GET", "/api/auth/profile")["data"]["user"]

    def update_profile(
        self,
        *,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> dict[str, Any]:
        payload = _without_none({"name": name, "email": email, "phone": phone})
        return self._request("PUT", "/api/auth/profile", json=payload)["data"]["user"]

    def delete_profile(self) -> None:
        self._request("DELETE", "/api/auth/profile")
        self.logout()

    def change_password(self, *, current_password: str, new_password: str) -> None:
        self._request(
            "PUT",
            "/api/auth/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )

    # Requisitions

    def list_requisitions(
        self,
        *,
        status: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> dict[str, Any]:
        params = _without_none({"status": status, "page": page, "limit": limit})
        return self._request("GET", "/api/requisitions", params=params)["data"]

    def get_requisition(self, requisition_id: int) -> dict[str, Any]:
        return self._request("GET", f"/api/requisitions/{requisition_id}")["data"]["requisition"]

    def create_requisition(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/requisitions", json=payload)["data"]["requisition"]

    def update_requisition(self, requisition_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        return self._request(
            "PATCH", f"/api/requisitions/{requisition_id}", json=changes
        )["data"]["requisition"]

    def delete_requisition(self, requisition_id: int) -> None:
        self._request("DELETE", f"/api/requisitions/{requisition_id}")

    def add_note(self, requisition_id: int, text: str) -> dict[str, Any]:
        return self._request(
            "POST", f"/api/requisitions/{requisition_id}/notes", json={"text": text}
        )["data"]["requisition"]


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _without_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
