# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

from tailorshop.domain.exceptions import InvariantViolation

from .exceptions import InvalidStatusTransitionError


class RequisitionStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    READY = "ready"
    COLLECTED = "collected"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)

    def can_transition_to(self, target: RequisitionStatus) -> bool:
        return target.rank >= self.rank


_STATUS_ORDER = (
    RequisitionStatus.PENDING,
    RequisitionStatus.IN_PROGRESS,
    RequisitionStatus.READY,
    RequisitionStatus.COLLECTED,
)


def check_measurements(measurements: Mapping[str, float]) -> dict[str, float]:
    checked: dict[str, float] = {}
    for key, value in measurements.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvariantViolation(f"Measurement '{key}' must be a number", field=f"measurements.{key}")
        if not math.isfinite(value):
            raise InvariantViolation(f"Measurement '{key}' must be finite", field=f"measurements.{key}")
        if value < 0:
            raise InvariantViolation(f"Measurement '{key}' cannot be negative", field=f"measurements.{key}")
        checked[key] = float(value)
    return checked


@dataclass(slots=True, frozen=True)
class RequisitionNote:

    text: str
    created_at: datetime


@dataclass(slots=True)
class Requisition:
    """Customer order owned by a single user.

    Status only moves forward through pending, in-progress, ready and
    collected; staying put is allowed and steps may be skipped.
    """

    id: int | None
    owner_id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
    measurements: dict[str, float] = field(default_factory=dict)
    contact_email: str | None = None
    contact_phone: str | None = None
    status: RequisitionStatus = RequisitionStatus.PENDING
    due_date: date | None = None
    notes: list[RequisitionNote] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvariantViolation("Customer name is required", field="name")
        self.measurements = check_measurements(self.measurements)
        self.status = RequisitionStatus(self.status)

    def change_status(self, target: RequisitionStatus, *, now: datetime) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStatusTransitionError(self.status, target)
        self.status = target
        self.updated_at = now

    def add_note(self, text: str, *, now: datetime) -> RequisitionNote:
        text = text.strip()
        if not text:
            raise InvariantViolation("Note text is required", field="text")
        note = RequisitionNote(text=text, created_at=now)
        self.notes.append(note)
        self.updated_at = now
        return note
