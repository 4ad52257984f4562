# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    MISSING = "missing"
    CONTACT_REQUIRED = "contact_required"
    PHONE_INVALID = "phone_invalid"
    NAME_INVALID = "name_invalid"
    PASSWORD_TOO_SHORT = "password_too_short"
    EMPTY_UPDATE = "empty_update"
    STATUS_INVALID = "status_invalid"
    MEASUREMENT_INVALID = "measurement_invalid"
