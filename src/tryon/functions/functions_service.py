"""Orchestration behind the ``fashnTryOn`` and ``kieTryOn`` functions."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import AppConfig
from ..providers.providers_base import ProviderDriver
from ..providers.providers_factory import create_driver
from .functions_schemas import (
    GarmentTryOnBody,
    GarmentTryOnResponse,
    JewelryTryOnBody,
    JewelryTryOnResponse,
    parse_body,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TryOnService:
    """Check the provider key, validate the body, then submit and poll.

    A missing key is reported before the body is even parsed.
    """

    fashn: ProviderDriver
    kie: ProviderDriver

    @classmethod
    def from_config(cls, config: AppConfig) -> "TryOnService":
        return cls(fashn=create_driver("fashn", config), kie=create_driver("kie", config))

    async def garment_try_on(self, raw_body: bytes) -> GarmentTryOnResponse:
        api_key = self.fashn.api_key()
        body: GarmentTryOnBody = parse_body(GarmentTryOnBody, raw_body)
        result = await self.fashn.run(body.to_request(), api_key=api_key)
        logger.info("fashn.tryon.success job_id=%s", result.job_id)
        return GarmentTryOnResponse(output_url=result.output_url, prediction_id=result.job_id)

    async def jewelry_try_on(self, raw_body: bytes) -> JewelryTryOnResponse:
        api_key = self.kie.api_key()
        body: JewelryTryOnBody = parse_body(JewelryTryOnBody, raw_body)
        result = await self.kie.run(body.to_request(), api_key=api_key)
        logger.info("kie.tryon.success job_id=%s", result.job_id)
        return JewelryTryOnResponse(output_url=result.output_url)


__all__ = ["TryOnService"]
