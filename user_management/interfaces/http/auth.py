# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, request

from user_management.domain.users.exceptions import InvalidTokenError
from user_management.domain.users.repositories import TokenService
from user_management.shared.logging import logger


def _bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def bearer_required(tokens: TokenService) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Guard a view with token verification; claims end up on ``flask.g``."""

    def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(f)
        def inner(*a, **kw):
            token = _bearer_token()
            if not token:
                logger.warning(
                    f"auth.guard: no bearer token on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise InvalidTokenError()

            try:
                claims = tokens.verify(token)
            except InvalidTokenError:
                logger.warning(f"auth.guard: rejected token on {request.method} {request.path}")
                raise

            g.user_id = str(claims.subject)
            g.token_claims = claims
            return f(*a, **kw)

        return inner

    return decorator


__all__ = ["bearer_required"]
