# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

MASK = "***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    # credentials embedded in connection strings
    (re.compile(r"(\w+(?:\+\w+)?://[^:/@\s]+:)[^@\s/]+@"), rf"\1{MASK}@"),
    (re.compile(r"eyJ[\w-]+\.[\w-]+\.[\w-]+"), "<jwt>"),
    (re.compile(r"(bearer\s+)[\w.\-]{16,}", re.IGNORECASE), rf"\1{MASK}"),
    (re.compile(r"(authorization\s*:\s*)(?!bearer\b)\S+", re.IGNORECASE), rf"\1{MASK}"),
    (re.compile(r"(token\s*[:=]\s*['\"]?)[\w.\-]{16,}", re.IGNORECASE), rf"\1{MASK}"),
    (re.compile(r"(secret[_-]?key\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE), rf"\1{MASK}"),
    (re.compile(r"(password\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE), rf"\1{MASK}"),
    # customer contact details: keep the domain and the last two digits
    (re.compile(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)+)"), rf"{MASK}@\1"),
    (re.compile(r"(?<![\w.])\+?\d{8,13}(\d{2})(?!\w)"), rf"{MASK}\1"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> None:
    """Loguru patcher: masks the rendered message in place."""
    record["message"] = sanitize_message(record["message"])
