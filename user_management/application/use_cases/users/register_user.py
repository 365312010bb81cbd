# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

from user_management.domain.exceptions import InvariantViolation
from user_management.domain.users.entities import User, normalize_email
from user_management.domain.users.exceptions import UserAlreadyExistsError
from user_management.domain.users.repositories import CredentialStoreFactory, PasswordHasher
from user_management.shared.errors import ValidationError
from user_management.shared.logging import logger


def _invariant_to_validation_error(exc: InvariantViolation) -> ValidationError:
    field = exc.field or "body"
    return ValidationError(
        context={
            "fields": [field],
            "errors": [{"field": field, "type": "invariant_violation", "message": str(exc)}],
        }
    )


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        stores: CredentialStoreFactory,
        password_hasher: PasswordHasher,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._stores = stores
        self._password_hasher = password_hasher
        self._clock = clock

    def execute(self, email: str, username: str, password: str) -> User:
        email = normalize_email(email)
        with self._stores() as store:
            if store.find_by_email(email) is not None:
                logger.info("users.register: rejected, email already registered")
                raise UserAlreadyExistsError()

            # Only the hash is ever handed to the store.
            try:
                user = User(
                    id=uuid4(),
                    email=email,
                    username=username,
                    password_hash=self._password_hasher.hash(password),
                    created_at=self._clock(),
                )
            except InvariantViolation as exc:
                logger.info(f"users.register: rejected, invalid {exc.field or 'record'}")
                raise _invariant_to_validation_error(exc) from exc
            store.add(user)
            store.commit()

        logger.info(f"users.register: ok user_id={user.id}")
        return user
