# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING

from tailorshop.shared.errors.base import NotFoundError, ValidationError
from tailorshop.shared.errors.validation_types import ValidationErrorType

if TYPE_CHECKING:
    from .entities import RequisitionStatus


class RequisitionNotFoundError(NotFoundError):
    def __init__(self, requisition_id: int | None = None) -> None:
        super().__init__("requisition", requisition_id)


class InvalidStatusTransitionError(ValidationError):
    def __init__(self, current: RequisitionStatus, target: RequisitionStatus) -> None:
        super().__init__(
            "invalid_status_transition",
            message=f"Cannot move requisition from '{current}' back to '{target}'",
            context={
                "type": ValidationErrorType.STATUS_INVALID.value,
                "from": str(current),
                "to": str(target),
            },
        )
