"""Dependency wiring helpers."""

from fastapi import FastAPI

from .auth.auth_service import AuthService
from .config import AppConfig
from .functions.functions_api import register_error_handlers
from .functions.functions_api import router as functions_router
from .functions.functions_service import TryOnService
from .health import router as health_router


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    app.state.config = config
    app.state.auth_service = AuthService.from_config(config)
    app.state.tryon_service = TryOnService.from_config(config)

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(functions_router)
