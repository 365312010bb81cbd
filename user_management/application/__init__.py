# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import WerkzeugPasswordHasher
from .services.tokens import JwtTokenService
from .use_cases.users.list_users import ListUsersUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "JwtTokenService",
    "ListUsersUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "WerkzeugPasswordHasher",
]
