# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import TokenClaims, User, UserProfile, normalize_email
from .exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthorizedError,
    UserAlreadyExistsError,
)
from .repositories import (
    CredentialStore,
    CredentialStoreFactory,
    PasswordHasher,
    TokenService,
)

__all__ = [
    "CredentialStore",
    "CredentialStoreFactory",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PasswordHasher",
    "TokenClaims",
    "TokenService",
    "UnauthorizedError",
    "User",
    "UserAlreadyExistsError",
    "UserProfile",
    "normalize_email",
]
