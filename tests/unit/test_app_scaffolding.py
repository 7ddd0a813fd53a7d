from __future__ import annotations

import pytest
from fastapi import FastAPI

from src.tryon.config import AppConfig
from src.tryon.functions.functions_service import TryOnService
from src.tryon.main import create_app
from src.tryon.providers.providers_factory import create_driver
from src.tryon.providers.providers_fashn import FashnDriver
from src.tryon.providers.providers_kie import AdjustImagePolicy, KieDriver


def test_config_defaults() -> None:
    config = AppConfig()

    assert config.poll_interval_seconds == 2.0
    assert config.max_poll_attempts == 60
    assert config.kie_adjust_image_policy is AdjustImagePolicy.MODEL


def test_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("TRYON_MAX_POLL_ATTEMPTS", "7")
    monkeypatch.setenv("TRYON_KIE_ADJUST_IMAGE_POLICY", "model_and_jewelry")

    config = AppConfig()

    assert config.max_poll_attempts == 7
    assert config.kie_adjust_image_policy is AdjustImagePolicy.MODEL_AND_JEWELRY


def test_factory_injects_polling_limits() -> None:
    config = AppConfig(poll_interval_seconds=0.25, max_poll_attempts=4)

    fashn = create_driver("FASHN", config)
    kie = create_driver("kie", config)

    assert isinstance(fashn, FashnDriver)
    assert isinstance(kie, KieDriver)
    assert (fashn.poll_interval_seconds, fashn.max_attempts) == (0.25, 4)
    assert (kie.poll_interval_seconds, kie.max_attempts) == (0.25, 4)


def test_factory_rejects_unknown_provider() -> None:
    with pytest.raises(ValueError):
        create_driver("replicate", AppConfig())


def test_create_app_wires_services() -> None:
    app = create_app(AppConfig(jwt_signing_key="secret"))

    assert isinstance(app, FastAPI)
    assert isinstance(app.state.tryon_service, TryOnService)
    paths = {route.path for route in app.routes}
    assert {"/api/functions/fashnTryOn", "/api/functions/kieTryOn", "/healthz"} <= paths
