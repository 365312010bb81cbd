# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, time-bounded session tokens (JWS compact serialisation, HMAC).

Validity is decided from the signature and the claims alone; nothing is
stored server-side, so there is no revocation.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import jwt

from user_management.domain.users.entities import TokenClaims, User
from user_management.domain.users.exceptions import InvalidTokenError
from user_management.domain.users.repositories import TokenService
from user_management.shared.config import JwtConfig
from user_management.shared.errors import ConfigurationError
from user_management.shared.logging import logger

_REQUIRED_CLAIMS = ["sub", "email", "jti", "iss", "aud", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    def __init__(
        self,
        config: JwtConfig,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not config.key:
            raise ConfigurationError("JWT_KEY")
        self._key = config.key
        self._issuer = config.issuer
        self._audience = config.audience
        self._algorithm = config.algorithm
        self._ttl = timedelta(minutes=config.ttl_minutes)
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user: User, now: datetime | None = None) -> str:
        issued_at = now or self._clock()
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "jti": uuid4().hex,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._key, algorithm=self._algorithm)

    def verify(self, token: str, now: datetime | None = None) -> TokenClaims:
        """Return the token's claims or raise ``InvalidTokenError``.

        Expiry is checked against ``now`` with no leeway, so the library's
        own wall-clock checks are switched off.
        """

        checked_at = now or self._clock()
        try:
            payload = jwt.decode(
                token,
                self._key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidTokenError as exc:
            logger.debug(f"tokens.verify: rejected ({type(exc).__name__})")
            raise InvalidTokenError() from exc

        try:
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
            subject = UUID(str(payload["sub"]))
        except (TypeError, ValueError, OverflowError) as exc:
            logger.debug("tokens.verify: rejected (malformed claims)")
            raise InvalidTokenError() from exc

        if checked_at > expires_at:
            logger.debug("tokens.verify: rejected (expired)")
            raise InvalidTokenError()

        return TokenClaims(
            subject=subject,
            email=str(payload["email"]),
            token_id=str(payload["jti"]),
            issuer=str(payload["iss"]),
            audience=self._audience,
            expires_at=expires_at,
        )


__all__ = ["JwtTokenService"]
