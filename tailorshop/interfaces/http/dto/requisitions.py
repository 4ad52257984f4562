# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any

from pydantic import (
    AliasGenerator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from tailorshop.domain.requisitions.entities import Requisition, RequisitionStatus
from tailorshop.shared.errors.validation_types import ValidationErrorType

from .auth import PHONE_PATTERN


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class ContactInfoDTO(BaseModel):
    email: EmailStr | None = None
    phone: str | None = None

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_is_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        if value is not None and not PHONE_PATTERN.match(value):
            raise PydanticCustomError(
                ValidationErrorType.PHONE_INVALID,
                "Phone must contain 10 to 15 digits",
                {"pattern": PHONE_PATTERN.pattern},
            )
        return value


def _clean_measurements(value: dict[str, float | None] | None) -> dict[str, float] | None:
    if value is None:
        return None
    cleaned: dict[str, float] = {}
    for key, amount in value.items():
        if amount is None:
            continue
        if not math.isfinite(amount):
            raise PydanticCustomError(
                ValidationErrorType.MEASUREMENT_INVALID,
                "Measurement '{name}' must be a finite number",
                {"name": key},
            )
        if amount < 0:
            raise PydanticCustomError(
                ValidationErrorType.MEASUREMENT_INVALID,
                "Measurement '{name}' cannot be negative",
                {"name": key},
            )
        cleaned[key] = amount
    return cleaned


class _RequisitionFieldsDTO(BaseModel):
    description: str | None = Field(None, max_length=2000)
    measurements: dict[str, float | None] | None = None
    contact_info: ContactInfoDTO | None = Field(None, alias="contactInfo")
    due_date: date | None = Field(None, alias="dueDate")

    model_config = ConfigDict(validate_by_name=True)

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value: Any) -> Any:
        if isinstance(value, str) and "T" in value:
            # ISO timestamps from date pickers; keep the calendar day
            return value.split("T", 1)[0]
        return _blank_to_none(value)

    @field_validator("measurements")
    @classmethod
    def validate_measurements(
        cls, value: dict[str, float | None] | None
    ) -> dict[str, float] | None:
        return _clean_measurements(value)


class CreateRequisitionDTO(_RequisitionFieldsDTO):
    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Customer name cannot be empty",
                {},
            )
        return value

    def to_command(self) -> dict[str, Any]:
        contact = self.contact_info or ContactInfoDTO()
        return {
            "name": self.name,
            "description": self.description or "",
            "measurements": self.measurements or {},
            "contact_email": contact.email,
            "contact_phone": contact.phone,
            "due_date": self.due_date,
        }


class UpdateRequisitionDTO(_RequisitionFieldsDTO):
    name: str | None = Field(None, min_length=1, max_length=100)
    status: RequisitionStatus | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Customer name cannot be empty",
                {},
            )
        return value.strip() if value is not None else value

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value: Any) -> Any:
        if value is None or (
            isinstance(value, str) and value in {status.value for status in RequisitionStatus}
        ):
            return value
        raise PydanticCustomError(
            ValidationErrorType.STATUS_INVALID,
            "Status must be one of: {allowed}",
            {"allowed": ", ".join(status.value for status in RequisitionStatus)},
        )

    @model_validator(mode="after")
    def require_some_change(self) -> UpdateRequisitionDTO:
        if not self.model_fields_set:
            raise PydanticCustomError(
                ValidationErrorType.EMPTY_UPDATE,
                "Nothing to update",
                {},
            )
        return self

    def to_changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        provided = self.model_fields_set
        if "name" in provided and self.name is not None:
            changes["name"] = self.name.strip()
        if "description" in provided:
            changes["description"] = self.description or ""
        if "measurements" in provided and self.measurements is not None:
            changes["measurements"] = self.measurements
        if "contact_info" in provided and self.contact_info is not None:
            contact = self.contact_info
            if "email" in contact.model_fields_set:
                changes["contact_email"] = contact.email
            if "phone" in contact.model_fields_set:
                changes["contact_phone"] = contact.phone
        if "due_date" in provided:
            changes["due_date"] = self.due_date
        if "status" in provided and self.status is not None:
            changes["status"] = self.status
        return changes


class AddNoteDTO(BaseModel):
    text: str = Field(min_length=1, max_length=1000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Note text cannot be empty",
                {},
            )
        return value


class RequisitionQueryDTO(BaseModel):
    status: RequisitionStatus | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=100)

    @field_validator("status", mode="before")
    @classmethod
    def blank_status(cls, value: Any) -> Any:
        return _blank_to_none(value)


_CAMEL = ConfigDict(alias_generator=AliasGenerator(serialization_alias=to_camel))


class NoteDTO(BaseModel):
    text: str
    created_at: datetime

    model_config = _CAMEL


class RequisitionDTO(BaseModel):
    id: int
    name: str
    description: str
    measurements: dict[str, float]
    contact_info: ContactInfoDTO
    status: RequisitionStatus
    due_date: date | None
    notes: list[NoteDTO]
    created_at: datetime
    updated_at: datetime

    model_config = _CAMEL

    @classmethod
    def from_entity(cls, requisition: Requisition) -> RequisitionDTO:
        return cls(
            id=requisition.id,
            name=requisition.name,
            description=requisition.description,
            measurements=requisition.measurements,
            contact_info=ContactInfoDTO(
                email=requisition.contact_email,
                phone=requisition.contact_phone,
            ),
            status=requisition.status,
            due_date=requisition.due_date,
            notes=[NoteDTO(text=note.text, created_at=note.created_at) for note in requisition.notes],
            created_at=requisition.created_at,
            updated_at=requisition.updated_at,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
