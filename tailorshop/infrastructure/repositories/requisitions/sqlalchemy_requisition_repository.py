# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func, select

from tailorshop.domain.requisitions.entities import Requisition as DomainRequisition
from tailorshop.domain.requisitions.entities import RequisitionNote, RequisitionStatus
from tailorshop.domain.requisitions.exceptions import RequisitionNotFoundError
from tailorshop.domain.requisitions.repositories import RequisitionRepository
from tailorshop.infrastructure.db.mapping import as_utc
from tailorshop.infrastructure.db.models import Requisition
from tailorshop.infrastructure.db.session import SessionFactory, session_scope


def _notes_to_rows(notes: list[RequisitionNote]) -> list[dict[str, Any]]:
    return [{"text": note.text, "created_at": note.created_at.isoformat()} for note in notes]


def _notes_from_rows(rows: list[dict[str, Any]] | None) -> list[RequisitionNote]:
    return [
        RequisitionNote(text=row["text"], created_at=as_utc(datetime.fromisoformat(row["created_at"])))
        for row in rows or []
    ]


def _to_domain(row: Requisition) -> DomainRequisition:
    return DomainRequisition(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        description=row.description or "",
        measurements=dict(row.measurements or {}),
        contact_email=row.contact_email,
        contact_phone=row.contact_phone,
        status=RequisitionStatus(row.status),
        due_date=row.due_date,
        notes=_notes_from_rows(row.notes),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _apply(row: Requisition, requisition: DomainRequisition) -> None:
    row.name = requisition.name
    row.description = requisition.description
    row.measurements = dict(requisition.measurements)
    row.contact_email = requisition.contact_email
    row.contact_phone = requisition.contact_phone
    row.status = requisition.status.value
    row.due_date = requisition.due_date
    row.notes = _notes_to_rows(requisition.notes)
    row.updated_at = requisition.updated_at


class SqlAlchemyRequisitionRepository(RequisitionRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def add(self, requisition: DomainRequisition) -> DomainRequisition:
        with session_scope(self._session_factory) as session:
            row = Requisition(owner_id=requisition.owner_id, created_at=requisition.created_at)
            _apply(row, requisition)
            session.add(row)
            session.flush()
            return _to_domain(row)

    def get_for_owner(self, owner_id: int, requisition_id: int) -> DomainRequisition | None:
        with session_scope(self._session_factory) as session:
            row = session.scalars(
                select(Requisition).where(
                    Requisition.id == requisition_id,
                    Requisition.owner_id == owner_id,
                )
            ).first()
            return _to_domain(row) if row else None

    def list_for_owner(
        self,
        owner_id: int,
        *,
        status: RequisitionStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[DomainRequisition], int]:
        conditions = [Requisition.owner_id == owner_id]
        if status is not None:
            conditions.append(Requisition.status == status.value)

        with session_scope(self._session_factory) as session:
            total = session.scalar(select(func.count(Requisition.id)).where(*conditions)) or 0
            rows = session.scalars(
                select(Requisition)
                .where(*conditions)
                .order_by(Requisition.created_at.desc(), Requisition.id.desc())
                .offset(offset)
                .limit(limit)
            ).all()
            return [_to_domain(row) for row in rows], int(total)

    def save(self, requisition: DomainRequisition) -> DomainRequisition:
        with session_scope(self._session_factory) as session:
            row = session.scalars(
                select(Requisition).where(
                    Requisition.id == requisition.id,
                    Requisition.owner_id == requisition.owner_id,
                )
            ).first()
            if row is None:
                raise RequisitionNotFoundError(requisition.id)
            _apply(row, requisition)
            session.flush()
            return _to_domain(row)

    def delete_for_owner(self, owner_id: int, requisition_id: int) -> bool:
        with session_scope(self._session_factory) as session:
            row = session.scalars(
                select(Requisition).where(
                    Requisition.id == requisition_id,
                    Requisition.owner_id == owner_id,
                )
            ).first()
            if row is None:
                return False
            session.delete(row)
            return True
