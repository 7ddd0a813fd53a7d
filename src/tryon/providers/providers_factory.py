"""Factory for provider drivers."""

from __future__ import annotations

from ..config import AppConfig
from .providers_base import ProviderDriver
from .providers_fashn import FashnDriver
from .providers_kie import KieDriver


def create_driver(name: str, config: AppConfig) -> ProviderDriver:
    """Instantiate provider driver by name, wired with configured polling limits."""
    lower = name.lower()
    if lower == "fashn":
        return FashnDriver(
            api_url=config.fashn_api_url,
            model_name=config.fashn_model_name,
            timeout_seconds=config.request_timeout_seconds,
            poll_interval_seconds=config.poll_interval_seconds,
            max_attempts=config.max_poll_attempts,
        )
    if lower == "kie":
        return KieDriver(
            api_url=config.kie_api_url,
            model=config.kie_model,
            output_format=config.kie_output_format,
            adjust_image_policy=config.kie_adjust_image_policy,
            timeout_seconds=config.request_timeout_seconds,
            poll_interval_seconds=config.poll_interval_seconds,
            max_attempts=config.max_poll_attempts,
        )
    raise ValueError(f"Unsupported provider '{name}'")
