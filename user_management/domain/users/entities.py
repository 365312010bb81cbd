# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""User identity records and the claims carried by session tokens."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from user_management.domain.exceptions import InvariantViolation

EMAIL_MAX_LENGTH = 100
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50


def normalize_email(email: str) -> str:
    """Canonical form used for storage, lookups and uniqueness."""

    return email.strip().lower()


@dataclass(slots=True, frozen=True)
class UserProfile:
    """Outward-facing view of a user; never carries credentials."""

    id: UUID
    email: str
    username: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class User:

    id: UUID
    email: str
    username: str
    password_hash: str = field(repr=False)
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.email:
            raise InvariantViolation("email is required", field="email")
        if len(self.email) > EMAIL_MAX_LENGTH:
            raise InvariantViolation("email is too long", field="email")
        if not USERNAME_MIN_LENGTH <= len(self.username) <= USERNAME_MAX_LENGTH:
            raise InvariantViolation("username length out of range", field="username")
        if not self.password_hash:
            raise InvariantViolation("password hash must not be empty", field="password_hash")
        if self.created_at.tzinfo is None:
            raise InvariantViolation("created_at must be timezone-aware", field="created_at")

    def profile(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            email=self.email,
            username=self.username,
            created_at=self.created_at,
        )


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Verified contents of a session token."""

    subject: UUID
    email: str
    token_id: str
    issuer: str
    audience: str
    expires_at: datetime
