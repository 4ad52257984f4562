# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tailorshop.domain.requisitions.exceptions import RequisitionNotFoundError
from tailorshop.domain.requisitions.repositories import RequisitionRepository
from tailorshop.shared.logging import logger


class DeleteRequisitionUseCase:
    def __init__(self, *, requisitions: RequisitionRepository) -> None:
        self._requisitions = requisitions

    def execute(self, owner_id: int, requisition_id: int) -> None:
        if not self._requisitions.delete_for_owner(owner_id, requisition_id):
            raise RequisitionNotFoundError(requisition_id)
        logger.info(f"requisitions.delete: id={requisition_id} owner_id={owner_id}")
