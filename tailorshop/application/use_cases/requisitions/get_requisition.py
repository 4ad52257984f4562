# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tailorshop.domain.requisitions.entities import Requisition
from tailorshop.domain.requisitions.exceptions import RequisitionNotFoundError
from tailorshop.domain.requisitions.repositories import RequisitionRepository


def load_owned(
    requisitions: RequisitionRepository, owner_id: int, requisition_id: int
) -> Requisition:
    # Someone else's requisition is reported exactly like a missing one
    requisition = requisitions.get_for_owner(owner_id, requisition_id)
    if requisition is None:
        raise RequisitionNotFoundError(requisition_id)
    return requisition


class GetRequisitionUseCase:
    def __init__(self, *, requisitions: RequisitionRepository) -> None:
        self._requisitions = requisitions

    def execute(self, owner_id: int, requisition_id: int) -> Requisition:
        return load_owned(self._requisitions, owner_id, requisition_id)
