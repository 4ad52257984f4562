# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime


def as_utc(value: datetime) -> datetime:
    """SQLite hands timezone-aware columns back naive; treat those as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def as_utc_optional(value: datetime | None) -> datetime | None:
    return as_utc(value) if value is not None else None
