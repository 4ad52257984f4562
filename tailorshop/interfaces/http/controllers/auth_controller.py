# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from tailorshop.application.use_cases.users.change_password import ChangePasswordUseCase
from tailorshop.application.use_cases.users.login_user import LoginUserUseCase
from tailorshop.application.use_cases.users.manage_profile import (
    DeleteProfileUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from tailorshop.application.use_cases.users.register_user import RegisterUserUseCase
from tailorshop.infrastructure.audit import AuditAction, audit_log
from tailorshop.interfaces.http.auth_guard import BearerAuth, current_user_id
from tailorshop.interfaces.http.dto.auth import (
    MIN_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH_KEY,
    AuthSuccessDTO,
    ChangePasswordDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    UpdateProfileDTO,
    UserDTO,
)
from tailorshop.shared.errors import AppError
from tailorshop.shared.errors.validation import raise_validation_error
from tailorshop.shared.logging import logger
from tailorshop.shared.middleware.rate_limit import rate_limit


def _get_client_ip() -> str | None:
    return request.remote_addr


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


class AuthController:
    def __init__(
        self,
        *,
        auth: BearerAuth,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        get_profile_use_case: GetProfileUseCase,
        update_profile_use_case: UpdateProfileUseCase,
        delete_profile_use_case: DeleteProfileUseCase,
        change_password_use_case: ChangePasswordUseCase,
        rate_limit_requests: int = 10,
        rate_limit_window: float = 60.0,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ) -> None:
        self._auth = auth
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._get_profile_use_case = get_profile_use_case
        self._update_profile_use_case = update_profile_use_case
        self._delete_profile_use_case = delete_profile_use_case
        self._change_password_use_case = change_password_use_case
        self._rate_limit_requests = rate_limit_requests
        self._rate_limit_window = rate_limit_window
        self._password_rules = {MIN_PASSWORD_LENGTH_KEY: min_password_length}

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(_json_body(), context=self._password_rules)
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            user, token = self._register_use_case.execute(
                name=dto.name,
                email=dto.email,
                phone=dto.phone,
                password=dto.password,
            )
        except AppError as exc:
            audit_log(
                AuditAction.REGISTER,
                ip_address=_get_client_ip(),
                details={"error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=_get_client_ip(),
            success=True,
        )

        payload = AuthSuccessDTO(data={"user": UserDTO.from_entity(user).to_json(), "token": token})
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(payload.to_json()), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()

        try:
            user, token = self._login_use_case.execute(
                email=dto.email,
                phone=dto.phone,
                password=dto.password,
            )
        except AppError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"error": exc.code},
                success=False,
            )
            raise

        audit_log(AuditAction.LOGIN_SUCCESS, user_id=user.id, ip_address=ip_address)

        payload = AuthSuccessDTO(data={"user": UserDTO.from_entity(user).to_json(), "token": token})
        logger.info(f"auth.login: ok user_id={user.id}")
        return jsonify(payload.to_json()), 200

    def get_profile(self) -> tuple[Response, int]:
        user = self._get_profile_use_case.execute(current_user_id())
        payload = AuthSuccessDTO(data={"user": UserDTO.from_entity(user).to_json()})
        return jsonify(payload.to_json()), 200

    def update_profile(self) -> tuple[Response, int]:
        try:
            dto = UpdateProfileDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        user_id = current_user_id()
        user = self._update_profile_use_case.execute(
            user_id,
            name=dto.name,
            email=dto.email,
            phone=dto.phone,
        )
        audit_log(
            AuditAction.PROFILE_UPDATED,
            user_id=user_id,
            ip_address=_get_client_ip(),
            details={"fields": sorted(dto.model_fields_set)},
        )

        payload = AuthSuccessDTO(data={"user": UserDTO.from_entity(user).to_json()})
        return jsonify(payload.to_json()), 200

    def delete_profile(self) -> tuple[Response, int]:
        user_id = current_user_id()
        self._delete_profile_use_case.execute(user_id)
        audit_log(AuditAction.PROFILE_DELETED, user_id=user_id, ip_address=_get_client_ip())
        return jsonify(AuthSuccessDTO().to_json()), 200

    def change_password(self) -> tuple[Response, int]:
        try:
            dto = ChangePasswordDTO.model_validate(_json_body(), context=self._password_rules)
        except ValidationError as exc:
            raise_validation_error(exc)

        user_id = current_user_id()
        try:
            self._change_password_use_case.execute(
                user_id,
                current_password=dto.current_password,
                new_password=dto.new_password,
            )
        except AppError as exc:
            audit_log(
                AuditAction.PASSWORD_CHANGED,
                user_id=user_id,
                ip_address=_get_client_ip(),
                details={"error": exc.code},
                success=False,
            )
            raise

        audit_log(AuditAction.PASSWORD_CHANGED, user_id=user_id, ip_address=_get_client_ip())
        return jsonify(AuthSuccessDTO().to_json()), 200

    def as_blueprint(self) -> Blueprint:
        limited = rate_limit(self._rate_limit_requests, self._rate_limit_window)
        required = self._auth.required

        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=limited(self.register), methods=["POST"])
        bp.add_url_rule("/login", view_func=limited(self.login), methods=["POST"])
        bp.add_url_rule("/profile", view_func=required(self.get_profile), methods=["GET"])
        bp.add_url_rule("/profile", view_func=required(self.update_profile), methods=["PUT"])
        bp.add_url_rule("/profile", view_func=required(self.delete_profile), methods=["DELETE"])
        bp.add_url_rule(
            "/change-password",
            view_func=required(self.change_password),
            methods=["PUT"],
        )
        return bp
