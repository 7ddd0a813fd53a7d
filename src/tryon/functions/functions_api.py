"""HTTP routes exposing the try-on functions."""

from __future__ import annotations

import logging
from typing import Any, Awaitable

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..auth.auth_dependencies import require_user
from ..auth.auth_service import AuthenticatedUser
from ..providers.provider_errors import TryOnError
from .functions_schemas import ErrorResponse, GarmentTryOnResponse, JewelryTryOnResponse
from .functions_service import TryOnService

router = APIRouter(prefix="/api/functions", tags=["functions"])
logger = logging.getLogger(__name__)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Malformed or invalid body."},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token."},
    500: {"model": ErrorResponse, "description": "Provider not configured or job failed."},
}


def get_tryon_service(request: Request) -> TryOnService:
    """Fetch try-on service from application state."""
    try:
        return request.app.state.tryon_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("TryOnService is not configured") from exc


def error_response(exc: TryOnError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def _respond(call: Awaitable[BaseModel], *, function: str, user: AuthenticatedUser) -> JSONResponse:
    try:
        payload = await call
    except TryOnError as exc:
        logger.warning(
            "%s.failed user_id=%s status=%s error=%s",
            function,
            user.user_id,
            exc.status_code,
            exc.message,
        )
        return error_response(exc)
    except Exception as exc:
        logger.exception("%s.unexpected_error user_id=%s", function, user.user_id)
        return JSONResponse({"error": str(exc) or exc.__class__.__name__}, status_code=500)
    return JSONResponse(payload.model_dump(by_alias=True))


@router.post("/fashnTryOn", response_model=GarmentTryOnResponse, responses=ERROR_RESPONSES)
async def fashn_try_on(
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
    service: TryOnService = Depends(get_tryon_service),
) -> JSONResponse:
    """Garment try-on through FASHN; answers ``{outputUrl, predictionId}``."""
    raw_body = await request.body()
    return await _respond(service.garment_try_on(raw_body), function="fashnTryOn", user=user)


@router.post("/kieTryOn", response_model=JewelryTryOnResponse, responses=ERROR_RESPONSES)
async def kie_try_on(
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
    service: TryOnService = Depends(get_tryon_service),
) -> JSONResponse:
    """Jewelry try-on or adjustment through KIE; answers ``{outputUrl, success}``."""
    raw_body = await request.body()
    return await _respond(service.jewelry_try_on(raw_body), function="kieTryOn", user=user)


async def _tryon_error_handler(request: Request, exc: TryOnError) -> JSONResponse:
    return error_response(exc)


def register_error_handlers(app: FastAPI) -> None:
    """Render ``TryOnError`` raised from dependencies (e.g. auth) as ``{error}``."""
    app.add_exception_handler(TryOnError, _tryon_error_handler)


__all__ = ["get_tryon_service", "register_error_handlers", "router"]
