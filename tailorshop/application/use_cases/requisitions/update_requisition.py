# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from tailorshop.domain.requisitions.entities import (
    Requisition,
    RequisitionStatus,
    check_measurements,
)
from tailorshop.domain.requisitions.repositories import RequisitionRepository
from tailorshop.shared.logging import logger

from .create_requisition import utcnow
from .get_requisition import load_owned

_PLAIN_FIELDS = ("name", "description", "contact_email", "contact_phone", "due_date")


class UpdateRequisitionUseCase:
    """Apply a partial update to one of the caller's requisitions.

    Measurements are merged key by key; a status change must not move the
    order backwards through its lifecycle.
    """

    def __init__(
        self,
        *,
        requisitions: RequisitionRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._requisitions = requisitions
        self._clock = clock

    def execute(
        self, owner_id: int, requisition_id: int, changes: Mapping[str, Any]
    ) -> Requisition:
        requisition = load_owned(self._requisitions, owner_id, requisition_id)
        now = self._clock()

        for field_name in _PLAIN_FIELDS:
            if field_name in changes:
                setattr(requisition, field_name, changes[field_name])

        if changes.get("measurements") is not None:
            merged = {**requisition.measurements, **changes["measurements"]}
            requisition.measurements = check_measurements(merged)

        if changes.get("status") is not None:
            requisition.change_status(RequisitionStatus(changes["status"]), now=now)

        requisition.updated_at = now
        saved = self._requisitions.save(requisition)
        logger.info(
            f"requisitions.update: id={requisition_id} fields={sorted(changes)}"
        )
        return saved
