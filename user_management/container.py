# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from user_management.application.services.password_hashing import WerkzeugPasswordHasher
from user_management.application.services.tokens import JwtTokenService
from user_management.application.use_cases.users.list_users import ListUsersUseCase
from user_management.application.use_cases.users.login_user import LoginUserUseCase
from user_management.application.use_cases.users.register_user import RegisterUserUseCase
from user_management.domain.users.repositories import CredentialStoreFactory
from user_management.infrastructure.db import build_engine, build_session_factory
from user_management.infrastructure.repositories.users import credential_store_factory
from user_management.interfaces.http.controllers.users_controller import UsersController
from user_management.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def credential_stores(self) -> CredentialStoreFactory:
        return credential_store_factory(
            self.session_factory, resilience=self.config.resilience
        )

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(self.config.jwt)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            stores=self.credential_stores,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            stores=self.credential_stores,
            password_hasher=self.password_hasher,
            tokens=self.token_service,
        )

    @cached_property
    def list_users_use_case(self) -> ListUsersUseCase:
        return ListUsersUseCase(stores=self.credential_stores)

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            list_users_use_case=self.list_users_use_case,
            tokens=self.token_service,
        )
