"""Application configuration for the try-on service.

Polling cadence and provider endpoints are settings; provider API keys are
not part of this object and are read from the environment by each driver
per invocation.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .providers.providers_kie import AdjustImagePolicy


class AppConfig(BaseSettings):
    """Pydantic settings container, populated from ``TRYON_*`` variables."""

    model_config = cast(Any, SettingsConfigDict(env_prefix="TRYON_"))

    poll_interval_seconds: float = Field(
        default=2.0,
        ge=0.0,
        description="Fixed delay before every provider status check.",
    )
    max_poll_attempts: int = Field(
        default=60,
        ge=1,
        description="Status checks issued before a job is reported as timed out.",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="Timeout applied to each provider HTTP request.",
    )
    fashn_api_url: str = Field(default="https://api.fashn.ai/v1")
    fashn_model_name: str = Field(default="tryon-v1.6")
    kie_api_url: str = Field(default="https://api.kie.ai/api/v1/jobs")
    kie_model: str = Field(default="google/nano-banana-edit")
    kie_output_format: str = Field(default="png")
    kie_adjust_image_policy: AdjustImagePolicy = Field(
        default=AdjustImagePolicy.MODEL,
        description="Images sent with jewelry adjustments (pending product decision).",
    )
    jwt_signing_key: str = Field(
        default="",
        description="Shared secret used by the platform to sign user tokens; required.",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_audience: str | None = Field(default=None)

    @classmethod
    def build_default(cls) -> "AppConfig":
        return cls()


__all__ = ["AppConfig"]
