from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from user_management.domain.users.entities import User, normalize_email
from user_management.domain.users.exceptions import UserAlreadyExistsError
from user_management.domain.users.repositories import CredentialStore, PasswordHasher
from user_management.shared.config import (
    AppConfig,
    DatabaseConfig,
    JwtConfig,
    ResilienceConfig,
)

TEST_JWT_KEY = "test-signing-key-that-is-long-enough-for-hs256"


class InMemoryUserTable:
    def __init__(self) -> None:
        self.rows: dict[str, User] = {}


class InMemoryCredentialStore(CredentialStore):
    def __init__(self, table: InMemoryUserTable) -> None:
        self._table = table
        self._staged: list[User] = []

    def __enter__(self) -> InMemoryCredentialStore:
        self._staged = []
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._staged = []

    def find_by_email(self, email: str) -> User | None:
        return self._table.rows.get(normalize_email(email))

    def add(self, user: User) -> None:
        self._staged.append(user)

    def list_all(self) -> list[User]:
        return list(self._table.rows.values())

    def commit(self) -> None:
        emails = [normalize_email(user.email) for user in self._staged]
        if len(set(emails)) != len(emails) or any(e in self._table.rows for e in emails):
            self._staged = []
            raise UserAlreadyExistsError()
        for email, user in zip(emails, self._staged):
            self._table.rows[email] = user
        self._staged = []


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


def make_user(email: str = "a@x.com", username: str = "alice", **overrides) -> User:
    values = {
        "id": uuid4(),
        "email": email,
        "username": username,
        "password_hash": "hashed:secret1",
        "created_at": datetime.now(UTC),
    }
    values.update(overrides)
    return User(**values)


@pytest.fixture()
def user_table() -> InMemoryUserTable:
    return InMemoryUserTable()


@pytest.fixture()
def stores(user_table: InMemoryUserTable) -> Callable[[], InMemoryCredentialStore]:
    return lambda: InMemoryCredentialStore(user_table)


@pytest.fixture()
def jwt_config() -> JwtConfig:
    return JwtConfig(
        key=TEST_JWT_KEY,
        issuer="test-issuer",
        audience="test-audience",
        ttl_minutes=30,
    )


@pytest.fixture()
def app_config(jwt_config: JwtConfig) -> AppConfig:
    return AppConfig(
        app_env="test",
        database=DatabaseConfig(url="sqlite://"),
        jwt=jwt_config,
        resilience=ResilienceConfig(max_attempts=3, delay_seconds=0),
    )
