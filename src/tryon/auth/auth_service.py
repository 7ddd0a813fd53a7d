"""Verification of platform-issued user tokens.

Identity is owned by the hosting platform: it signs a JWT for every
signed-in user and the client forwards it as a bearer token. This service
only checks the signature, expiry and subject; it never issues tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import jwt
import structlog
from jwt import ExpiredSignatureError
from jwt import InvalidTokenError as PyJWTInvalidTokenError

from ..config import AppConfig

logger = structlog.get_logger(__name__)


class AuthError(Exception):
    """Base class for auth failures."""


class InvalidTokenError(AuthError):
    """Raised when token cannot be decoded or lacks a subject."""


class TokenExpiredError(AuthError):
    """Raised when token is expired."""


@dataclass(slots=True, frozen=True)
class AuthenticatedUser:
    """Caller identity extracted from a verified token."""

    user_id: str
    email: str | None = None


@dataclass(slots=True)
class AuthService:
    """Validate HS256 bearer tokens signed by the platform."""

    signing_key: str
    algorithm: str = "HS256"
    audience: str | None = None

    @classmethod
    def from_config(cls, config: AppConfig) -> "AuthService":
        if not config.jwt_signing_key:
            logger.error("auth.signing_key.missing")
            raise RuntimeError("TRYON_JWT_SIGNING_KEY is not configured")
        return cls(
            signing_key=config.jwt_signing_key,
            algorithm=config.jwt_algorithm,
            audience=config.jwt_audience,
        )

    def validate_token(self, token: str) -> AuthenticatedUser:
        options: dict[str, Any] = {"require": ["sub", "exp"]}
        if self.audience is None:
            options["verify_aud"] = False
        try:
            claims = jwt.decode(
                token,
                self.signing_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                options=options,
            )
        except ExpiredSignatureError as exc:
            logger.info("auth.token.expired")
            raise TokenExpiredError("token expired") from exc
        except PyJWTInvalidTokenError as exc:
            logger.info("auth.token.invalid", reason=str(exc))
            raise InvalidTokenError("invalid token") from exc

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError("token has no subject")
        return AuthenticatedUser(user_id=subject, email=claims.get("email"))


__all__ = [
    "AuthError",
    "AuthService",
    "AuthenticatedUser",
    "InvalidTokenError",
    "TokenExpiredError",
]
