"""FASHN garment try-on driver.

FASHN runs try-on jobs asynchronously: ``POST /run`` returns a prediction id
(occasionally an already completed prediction) and ``GET /status/{id}``
reports ``status``/``output``/``error``. Both image inputs may be public URLs
or data URIs.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar

import httpx

from .categories import GarmentCategory, resolve_category
from .image_refs import describe_image_reference, normalize_image_reference
from .job_models import (
    JobState,
    Sleep,
    StatusSnapshot,
    Submission,
    TryOnResult,
    error_message,
    output_urls,
)
from .polling import (
    DEFAULT_MAX_POLL_ATTEMPTS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    FAILED_FALLBACK_MESSAGE,
)
from .provider_errors import ProviderCreationError, TransientPollError
from .providers_base import ProviderDriver, auth_headers, json_object, read_error_body

logger = logging.getLogger(__name__)

CREATION_FAILED_MESSAGE = "FASHN task creation failed."


@dataclass(slots=True)
class GarmentTryOnRequest:
    """Inputs of one garment try-on."""

    model_image: str
    garment_image: str
    category: GarmentCategory | str = GarmentCategory.AUTO
    clothing_type: str | None = None
    mode: str = "balanced"
    garment_photo_type: str = "auto"
    moderation_level: str = "permissive"


@dataclass(slots=True)
class FashnDriver(ProviderDriver):
    """Submit a FASHN prediction and poll it to completion."""

    provider_id: ClassVar[str] = "fashn"
    display_name: ClassVar[str] = "FASHN"
    api_key_env: ClassVar[str] = "FASHN_API_KEY"

    api_url: str = "https://api.fashn.ai/v1"
    model_name: str = "tryon-v1.6"
    output_format: str = "jpeg"
    timeout_seconds: float = 30.0
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    max_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS
    sleep: Sleep = asyncio.sleep
    log: logging.Logger = field(default_factory=lambda: logger)

    def build_payload(self, request: GarmentTryOnRequest) -> dict[str, Any]:
        category = resolve_category(request.category, request.clothing_type)
        self.log.info(
            "fashn.request.prepared category=%s clothing_type=%r model_image=%s garment_image=%s",
            category.value,
            request.clothing_type,
            describe_image_reference(request.model_image),
            describe_image_reference(request.garment_image),
        )
        return {
            "model_name": self.model_name,
            "inputs": {
                "model_image": normalize_image_reference(request.model_image),
                "garment_image": normalize_image_reference(request.garment_image),
                "category": category.value,
                "mode": request.mode,
                "garment_photo_type": request.garment_photo_type,
                "moderation_level": request.moderation_level,
                "segmentation_free": True,
                "output_format": self.output_format,
                "return_base64": False,
                "num_samples": 1,
            },
        }

    async def submit(
        self, client: httpx.AsyncClient, payload: dict[str, Any], *, api_key: str
    ) -> Submission:
        response = await client.post(
            f"{self.api_url}/run", headers=auth_headers(api_key), json=payload
        )
        if not 200 <= response.status_code < 300:
            body_text = read_error_body(response)
            self.log.error(
                "fashn.job.create_failed status=%s body_preview=%s",
                response.status_code,
                body_text[:500],
            )
            raise ProviderCreationError(
                f"FASHN error: {response.status_code} - {body_text}",
                status_code=response.status_code,
                body=body_text,
            )

        try:
            body = json_object(response)
        except ValueError as exc:
            raise ProviderCreationError(CREATION_FAILED_MESSAGE) from exc

        prediction_id = body.get("id")
        state = JobState.parse(body.get("status"))
        outputs = output_urls(body.get("output"))

        if state is JobState.COMPLETED and outputs:
            job_id = str(prediction_id or "")
            return Submission(
                job_id=job_id, result=TryOnResult(output_url=outputs[0], job_id=job_id)
            )
        if state is JobState.FAILED:
            raise ProviderCreationError(
                error_message(body.get("error")) or FAILED_FALLBACK_MESSAGE
            )
        if not prediction_id:
            raise ProviderCreationError(CREATION_FAILED_MESSAGE)

        self.log.info("fashn.job.created job_id=%s", prediction_id)
        return Submission(job_id=str(prediction_id))

    async def check_status(
        self, client: httpx.AsyncClient, job_id: str, *, api_key: str
    ) -> StatusSnapshot:
        response = await client.get(
            f"{self.api_url}/status/{job_id}", headers=auth_headers(api_key)
        )
        if not 200 <= response.status_code < 300:
            raise TransientPollError(
                f"FASHN status check failed with status {response.status_code}"
            )
        body = json_object(response)
        return StatusSnapshot(
            state=JobState.parse(body.get("status")),
            outputs=output_urls(body.get("output")),
            error=error_message(body.get("error")),
        )


__all__ = ["FashnDriver", "GarmentTryOnRequest"]
