# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth import (
    AuthSuccessDTO,
    ChangePasswordDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    UpdateProfileDTO,
    UserDTO,
)
from .requisitions import (
    AddNoteDTO,
    CreateRequisitionDTO,
    RequisitionDTO,
    RequisitionQueryDTO,
    UpdateRequisitionDTO,
)

__all__ = [
    "AddNoteDTO",
    "AuthSuccessDTO",
    "ChangePasswordDTO",
    "CreateRequisitionDTO",
    "LoginRequestDTO",
    "RegisterRequestDTO",
    "RequisitionDTO",
    "RequisitionQueryDTO",
    "UpdateProfileDTO",
    "UpdateRequisitionDTO",
    "UserDTO",
]
