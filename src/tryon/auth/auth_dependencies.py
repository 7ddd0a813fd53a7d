"""Authentication dependency for the try-on routes."""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..providers.provider_errors import UnauthorizedError
from .auth_service import AuthError, AuthenticatedUser, AuthService

security = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    try:
        return request.app.state.auth_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("AuthService is not configured") from exc


def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    service: AuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    if credentials is None:
        raise UnauthorizedError("Unauthorized")
    try:
        return service.validate_token(credentials.credentials)
    except AuthError as exc:
        raise UnauthorizedError("Unauthorized") from exc


__all__ = ["get_auth_service", "require_user"]
