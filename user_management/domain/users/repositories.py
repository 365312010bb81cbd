# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from .entities import TokenClaims, User


class CredentialStore(Protocol):
    """Transactional access to persisted users.

    Used as a context manager: anything staged with ``add`` and not
    committed is discarded when the block exits.
    """

    def __enter__(self) -> CredentialStore: ...
    def __exit__(self, exc_type, exc, tb) -> None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def add(self, user: User) -> None: ...
    def list_all(self) -> list[User]: ...
    def commit(self) -> None: ...


CredentialStoreFactory = Callable[[], CredentialStore]


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, user: User, now: datetime | None = None) -> str: ...
    def verify(self, token: str, now: datetime | None = None) -> TokenClaims: ...
