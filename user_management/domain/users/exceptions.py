# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from user_management.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    default_code = "user_already_exists"
    default_status = HTTPStatus.CONFLICT


class UnauthorizedError(DomainError):
    default_code = "unauthorized"
    default_status = HTTPStatus.UNAUTHORIZED


class InvalidCredentialsError(UnauthorizedError):
    pass


class InvalidTokenError(UnauthorizedError):
    pass
