# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime

from tailorshop.domain.requisitions.entities import Requisition
from tailorshop.domain.requisitions.repositories import RequisitionRepository
from tailorshop.shared.logging import logger


def utcnow() -> datetime:
    return datetime.now(UTC)


class CreateRequisitionUseCase:
    def __init__(
        self,
        *,
        requisitions: RequisitionRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._requisitions = requisitions
        self._clock = clock

    def execute(
        self,
        owner_id: int,
        *,
        name: str,
        description: str = "",
        measurements: Mapping[str, float] | None = None,
        contact_email: str | None = None,
        contact_phone: str | None = None,
        due_date: date | None = None,
    ) -> Requisition:
        now = self._clock()
        requisition = Requisition(
            id=None,
            owner_id=owner_id,
            name=name,
            description=description,
            measurements=dict(measurements or {}),
            contact_email=contact_email,
            contact_phone=contact_phone,
            due_date=due_date,
            created_at=now,
            updated_at=now,
        )
        persisted = self._requisitions.add(requisition)
        logger.info(f"requisitions.create: id={persisted.id} owner_id={owner_id}")
        return persisted
