# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from tailorshop.domain.requisitions.entities import Requisition
from tailorshop.domain.requisitions.repositories import RequisitionRepository

from .create_requisition import utcnow
from .get_requisition import load_owned


class AddRequisitionNoteUseCase:
    def __init__(
        self,
        *,
        requisitions: RequisitionRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._requisitions = requisitions
        self._clock = clock

    def execute(self, owner_id: int, requisition_id: int, text: str) -> Requisition:
        requisition = load_owned(self._requisitions, owner_id, requisition_id)
        requisition.add_note(text, now=self._clock())
        return self._requisitions.save(requisition)
