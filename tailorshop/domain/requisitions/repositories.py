# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Requisition, RequisitionStatus


class RequisitionRepository(Protocol):
    def add(self, requisition: Requisition) -> Requisition: ...
    def get_for_owner(self, owner_id: int, requisition_id: int) -> Requisition | None: ...
    def list_for_owner(
        self,
        owner_id: int,
        *,
        status: RequisitionStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Requisition], int]: ...
    def save(self, requisition: Requisition) -> Requisition: ...
    def delete_for_owner(self, owner_id: int, requisition_id: int) -> bool: ...
