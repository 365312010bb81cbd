# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from user_management.domain.users.entities import UserProfile
from user_management.domain.users.repositories import CredentialStoreFactory


class ListUsersUseCase:
    def __init__(self, *, stores: CredentialStoreFactory) -> None:
        self._stores = stores

    def execute(self) -> list[UserProfile]:
        with self._stores() as store:
            users = store.list_all()
        return [user.profile() for user in users]


__all__ = ["ListUsersUseCase"]
