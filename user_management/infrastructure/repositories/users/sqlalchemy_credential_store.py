# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""SQLAlchemy-backed credential store acting as the unit of work."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from datetime import UTC
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from user_management.domain.users.entities import User, normalize_email
from user_management.domain.users.exceptions import UserAlreadyExistsError
from user_management.domain.users.repositories import CredentialStore
from user_management.infrastructure.db.models import UserRow
from user_management.infrastructure.resilience import (
    TRANSIENT_STORAGE_ERRORS,
    call_with_storage_retry,
)
from user_management.shared.config import ResilienceConfig
from user_management.shared.errors import PersistenceError
from user_management.shared.logging import logger

T = TypeVar("T")


def _to_domain(row: UserRow) -> User:
    created_at = row.created_at
    if created_at.tzinfo is None:
        # SQLite drops the offset; values are always written in UTC.
        created_at = created_at.replace(tzinfo=UTC)
    return User(
        id=row.id,
        email=row.email,
        username=row.username,
        password_hash=row.password_hash,
        created_at=created_at,
    )


def _to_row(user: User) -> UserRow:
    return UserRow(
        id=user.id,
        email=normalize_email(user.email),
        username=user.username,
        password_hash=user.password_hash,
        created_at=user.created_at,
    )


class SqlAlchemyCredentialStore(AbstractContextManager, CredentialStore):
    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        resilience: ResilienceConfig,
    ) -> None:
        self._session_factory = session_factory
        self._resilience = resilience
        self._session: Session | None = None
        self._staged: list[User] = []

    def __enter__(self) -> SqlAlchemyCredentialStore:
        self._session = self._session_factory()
        self._staged = []
        logger.debug("credential_store: session opened")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        session = self.session
        try:
            if exc is not None or self._staged:
                logger.debug(
                    f"credential_store: discarding {len(self._staged)} uncommitted user(s)"
                )
            session.rollback()
        except SQLAlchemyError as rollback_exc:
            logger.exception("credential_store: exception while finalising")
            if exc is None:
                raise PersistenceError("rollback") from rollback_exc
        finally:
            session.close()
            self._session = None
            self._staged = []
            logger.debug("credential_store: session closed")

    @property
    def session(self) -> Session:
        if self._session is None:
            msg = "CredentialStore session accessed before entering context"
            raise RuntimeError(msg)
        return self._session

    def find_by_email(self, email: str) -> User | None:
        normalized = normalize_email(email)

        def _query() -> UserRow | None:
            return self.session.execute(
                select(UserRow).where(UserRow.email == normalized)
            ).scalar_one_or_none()

        row = self._run("find_by_email", _query)
        return _to_domain(row) if row is not None else None

    def add(self, user: User) -> None:
        self._staged.append(user)

    def list_all(self) -> list[User]:
        def _query() -> list[UserRow]:
            return list(
                self.session.execute(
                    select(UserRow).order_by(UserRow.created_at.asc(), UserRow.id.asc())
                ).scalars()
            )

        return [_to_domain(row) for row in self._run("list_all", _query)]

    def commit(self) -> None:
        if not self._staged:
            return
        staged = list(self._staged)

        def _write() -> None:
            self.session.add_all(_to_row(user) for user in staged)
            self.session.commit()

        try:
            self._run("commit", _write)
        except IntegrityError as exc:
            logger.info("credential_store: commit rejected by unique constraint")
            self._staged = []
            raise UserAlreadyExistsError() from exc
        self._staged = []
        logger.debug(f"credential_store: committed {len(staged)} user(s)")

    def _run(self, operation: str, func: Callable[[], T]) -> T:
        def _attempt() -> T:
            try:
                return func()
            except (IntegrityError, *TRANSIENT_STORAGE_ERRORS):
                # Leave the session usable for the next attempt or the caller.
                self.session.rollback()
                raise

        try:
            return call_with_storage_retry(
                _attempt, config=self._resilience, operation=f"credential_store.{operation}"
            )
        except IntegrityError:
            raise
        except SQLAlchemyError as exc:
            logger.error(
                f"credential_store: {operation} failed ({type(exc).__name__}) "
                f"after up to {self._resilience.max_attempts} attempt(s)"
            )
            raise PersistenceError(operation) from exc


def credential_store_factory(
    session_factory: Callable[[], Session],
    *,
    resilience: ResilienceConfig,
) -> Callable[[], SqlAlchemyCredentialStore]:
    def _factory() -> SqlAlchemyCredentialStore:
        return SqlAlchemyCredentialStore(session_factory, resilience=resilience)

    return _factory


__all__ = ["SqlAlchemyCredentialStore", "credential_store_factory"]
