from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import (
    AliasGenerator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from tailorshop.domain.users.entities import User
from tailorshop.shared.errors.validation_types import ValidationErrorType

PHONE_PATTERN = re.compile(r"^[0-9]{10,15}$")
MIN_PASSWORD_LENGTH = 6
# Validation context key overriding MIN_PASSWORD_LENGTH
MIN_PASSWORD_LENGTH_KEY = "min_password_length"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _check_name(value: str) -> str:
    value = value.strip()
    if not 2 <= len(value) <= 50:
        raise PydanticCustomError(
            ValidationErrorType.NAME_INVALID,
            "Name must be between 2 and 50 characters",
            {"min_length": 2, "max_length": 50},
        )
    return value


def _check_phone(value: str | None) -> str | None:
    if value is not None and not PHONE_PATTERN.match(value):
        raise PydanticCustomError(
            ValidationErrorType.PHONE_INVALID,
            "Phone must contain 10 to 15 digits",
            {"pattern": PHONE_PATTERN.pattern},
        )
    return value


def _check_new_password(value: str, info: ValidationInfo) -> str:
    minimum = (info.context or {}).get(MIN_PASSWORD_LENGTH_KEY, MIN_PASSWORD_LENGTH)
    if len(value) < minimum:
        raise PydanticCustomError(
            ValidationErrorType.PASSWORD_TOO_SHORT,
            "Password must be at least {min_length} characters long",
            {"min_length": minimum},
        )
    return value


class _IdentityDTO(BaseModel):
    email: EmailStr | None = None
    phone: str | None = None

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_is_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        return value.lower() if value else value

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        return _check_phone(value)


class RegisterRequestDTO(_IdentityDTO):
    name: str = Field(max_length=128)
    password: str = Field(max_length=128)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _check_name(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str, info: ValidationInfo) -> str:
        return _check_new_password(value, info)

    @model_validator(mode="after")
    def require_contact(self) -> RegisterRequestDTO:
        if not self.email and not self.phone:
            raise PydanticCustomError(
                ValidationErrorType.CONTACT_REQUIRED,
                "Either email or phone is required",
                {},
            )
        return self


class LoginRequestDTO(_IdentityDTO):
    password: str = Field(min_length=1, max_length=128)  # No strength check on login

    @model_validator(mode="after")
    def require_identity(self) -> LoginRequestDTO:
        if not self.email and not self.phone:
            raise PydanticCustomError(
                ValidationErrorType.CONTACT_REQUIRED,
                "Either email or phone is required",
                {},
            )
        return self


class UpdateProfileDTO(_IdentityDTO):
    name: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return _check_name(value) if value is not None else value

    @model_validator(mode="after")
    def require_some_change(self) -> UpdateProfileDTO:
        if self.name is None and self.email is None and self.phone is None:
            raise PydanticCustomError(
                ValidationErrorType.EMPTY_UPDATE,
                "Nothing to update",
                {},
            )
        return self


class ChangePasswordDTO(BaseModel):
    current_password: str = Field(
        min_length=1,
        max_length=128,
        validation_alias="currentPassword",
    )
    new_password: str = Field(max_length=128, validation_alias="newPassword")

    model_config = ConfigDict(validate_by_name=True)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str, info: ValidationInfo) -> str:
        return _check_new_password(value, info)


class UserDTO(BaseModel):
    id: int
    name: str
    email: str | None
    phone: str | None
    created_at: datetime
    last_login_at: datetime | None

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls.model_validate(user)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class AuthSuccessDTO(BaseModel):
    ok: bool = True
    data: dict[str, Any] | None = None

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"ok": self.ok}
        if self.data is not None:
            payload["data"] = self.data
        return payload
