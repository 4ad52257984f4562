# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from tailorshop.shared.logging import logger

REDACTED = "***REDACTED***"

# Substrings of detail keys whose values never reach the audit trail.
_SECRET_KEY_PARTS = ("password", "token", "secret", "key", "phone", "email")


class AuditAction(StrEnum):
    REGISTER = "register"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    PROFILE_UPDATED = "profile_updated"
    PROFILE_DELETED = "profile_deleted"
    PASSWORD_CHANGED = "password_changed"
    REQUISITION_CREATED = "requisition_created"
    REQUISITION_UPDATED = "requisition_updated"
    REQUISITION_DELETED = "requisition_deleted"


def sanitize_details(details: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: REDACTED if any(part in key.lower() for part in _SECRET_KEY_PARTS) else value
        for key, value in details.items()
    }


def audit_log(
    action: AuditAction,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: Mapping[str, Any] | None = None,
    success: bool = True,
) -> None:
    """Writes one audit line for a security-relevant action.

    Failed actions are logged at WARNING so they stand out from normal traffic.
    """
    outcome = "ok" if success else "failed"
    line = f"audit {action} {outcome} user={user_id} ip={ip_address}"
    if details:
        line += f" details={sanitize_details(details)}"

    logger.bind(audit=True, action=str(action)).log("INFO" if success else "WARNING", line)


__all__ = ["AuditAction", "audit_log", "sanitize_details"]
