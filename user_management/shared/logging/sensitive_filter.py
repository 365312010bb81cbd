# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

# Order matters: whole tokens are masked before the generic key=value rules run.
_RULES: list[tuple[re.Pattern[str], str]] = [
    # Signing keys
    (re.compile(r"((?:secret|jwt)[_-]?key\s*[:=]\s*['\"]?)([^'\"\s]{8,})", re.IGNORECASE), rf"\1{_REDACTED}"),
    # Authorization header values and bearer tokens
    (re.compile(r"(authorization\s*:\s*['\"]?)(?!bearer\b)([^'\"\s]{10,})", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"(bearer\s+)([a-zA-Z0-9_\-\.]{20,})", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"\beyJ[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+"), "***JWT***"),
    (re.compile(r"(token\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{20,})"), rf"\1{_REDACTED}"),
    # Passwords and password hashes
    (re.compile(r"((?:password(?:_hash)?|passwd|pwd)\s*[:=]\s*['\"]?)([^'\"]+)", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"\bscrypt:\d+:\d+:\d+\$[^\s'\"]+"), _REDACTED),
    # Credentials embedded in database URLs
    (re.compile(r"(postgresql|postgres|mysql|mssql)(\+\w+)?://([^:/]+):([^@]+)@"), rf"\1\2://\3:{_REDACTED}@"),
    # Email local parts
    (re.compile(r"[a-zA-Z0-9._%+-]+@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})"), r"***@\1"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru filter: rewrite the message in place and always keep the record."""

    message = record.get("message")
    if message:
        record["message"] = sanitize_message(message)
    return True
