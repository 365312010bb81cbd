# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Error taxonomy rendered as ``{"error": code[, "context": ...]}`` responses.

Subclasses pick their wire code and HTTP status through the ``default_code``
and ``default_status`` class attributes; ``context`` is optional and must never
carry secrets, hashes or internal identifiers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class _ClassDefaultsError(AppError):
    default_code: ClassVar[str]
    default_status: ClassVar[HTTPStatus]

    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        AppError.__init__(
            self, code=self.default_code, status=self.default_status, context=context
        )


class DomainError(_ClassDefaultsError):
    """A business rule rejected the request."""

    default_code = "domain_error"
    default_status = HTTPStatus.BAD_REQUEST


class ValidationError(_ClassDefaultsError):
    """Malformed input; ``context`` lists the offending fields."""

    default_code = "validation_error"
    default_status = HTTPStatus.BAD_REQUEST


class InfrastructureError(_ClassDefaultsError):
    """Something outside the core failed; details stay in the logs."""

    default_code = "infrastructure_error"
    default_status = HTTPStatus.INTERNAL_SERVER_ERROR


class PersistenceError(InfrastructureError):
    default_code = "persistence_error"

    def __init__(self, operation: str | None = None) -> None:
        super().__init__()
        self.operation = operation


class ConfigurationError(InfrastructureError):
    default_code = "configuration_error"

    def __init__(self, setting: str) -> None:
        super().__init__(context={"setting": setting})
        self.setting = setting

    def __str__(self) -> str:
        return f"{self.code}: {self.setting} is not configured"
