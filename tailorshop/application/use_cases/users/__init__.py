# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .authenticate_user import AuthenticateRequestUseCase, extract_bearer_token
from .change_password import ChangePasswordUseCase
from .login_user import LoginUserUseCase
from .manage_profile import DeleteProfileUseCase, GetProfileUseCase, UpdateProfileUseCase
from .register_user import RegisterUserUseCase

__all__ = [
    "AuthenticateRequestUseCase",
    "ChangePasswordUseCase",
    "DeleteProfileUseCase",
    "GetProfileUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "UpdateProfileUseCase",
    "extract_bearer_token",
]
