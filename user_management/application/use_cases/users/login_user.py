# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from user_management.domain.users.entities import normalize_email
from user_management.domain.users.exceptions import InvalidCredentialsError
from user_management.domain.users.repositories import (
    CredentialStoreFactory,
    PasswordHasher,
    TokenService,
)
from user_management.shared.logging import logger

_TIMING_PLACEHOLDER_PASSWORD = "login-timing-placeholder"


class LoginUserUseCase:
    def __init__(
        self,
        *,
        stores: CredentialStoreFactory,
        password_hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._stores = stores
        self._password_hasher = password_hasher
        self._tokens = tokens
        # Unknown emails are checked against this so both failures cost one hash.
        self._placeholder_hash = password_hasher.hash(_TIMING_PLACEHOLDER_PASSWORD)

    def execute(self, email: str, password: str) -> str:
        with self._stores() as store:
            user = store.find_by_email(normalize_email(email))

        stored_hash = user.password_hash if user is not None else self._placeholder_hash
        password_valid = self._password_hasher.verify(password, stored_hash)
        if user is None or not password_valid:
            # Unknown email and wrong password are deliberately indistinguishable.
            logger.info("users.login: rejected")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user)
        logger.info(f"users.login: ok user_id={user.id}")
        return token
