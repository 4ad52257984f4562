# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from tailorshop.domain.requisitions.entities import Requisition, RequisitionStatus
from tailorshop.domain.requisitions.repositories import RequisitionRepository

MAX_PAGE_SIZE = 100


@dataclass(slots=True, frozen=True)
class RequisitionPage:

    items: list[Requisition]
    total: int
    page: int
    limit: int


class ListRequisitionsUseCase:
    def __init__(self, *, requisitions: RequisitionRepository) -> None:
        self._requisitions = requisitions

    def execute(
        self,
        owner_id: int,
        *,
        status: RequisitionStatus | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> RequisitionPage:
        page = max(1, page)
        limit = min(max(1, limit), MAX_PAGE_SIZE)
        items, total = self._requisitions.list_for_owner(
            owner_id,
            status=status,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return RequisitionPage(items=items, total=total, page=page, limit=limit)
