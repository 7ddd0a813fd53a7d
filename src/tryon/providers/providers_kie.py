"""KIE jewelry try-on driver.

KIE exposes a generic task API: ``POST /createTask`` answers
``{code, msg, data: {taskId}}`` and ``POST /recordInfo`` with ``{taskId}``
answers ``{code, data: {status, output, error}}``. The jewelry itself is
described in the prompt, together with the placement rules for its type.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar

import httpx

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
from .placement import build_adjust_prompt, build_tryon_prompt, coerce_jewelry_type
from .polling import (
    DEFAULT_MAX_POLL_ATTEMPTS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    FAILED_FALLBACK_MESSAGE,
)
from .provider_errors import (
    InvalidRequestError,
    ProviderCreationError,
    TransientPollError,
)
from .providers_base import ProviderDriver, auth_headers, json_object, read_error_body

logger = logging.getLogger(__name__)

CREATION_FAILED_MESSAGE = "Task creation failed."
KIE_SUCCESS_CODE = 200

TRY_ON_SIZE = "3:4"
ADJUST_SIZE = "1:1"


class JewelryAction(StrEnum):
    TRY_ON = "tryOn"
    ADJUST = "adjust"


class AdjustImagePolicy(StrEnum):
    """Which images an ``adjust`` task sends.

    Product has not settled whether an adjustment edits the previous try-on
    image alone or re-sends the jewelry reference too; the choice is a
    deployment setting until it does.
    """

    MODEL = "model"
    MODEL_AND_JEWELRY = "model_and_jewelry"


@dataclass(slots=True)
class JewelryTryOnRequest:
    """Inputs of one jewelry try-on or adjustment."""

    action: JewelryAction = JewelryAction.TRY_ON
    model_image: str | None = None
    jewelry_image: str | None = None
    jewelry_type: str | None = None
    adjustment_type: str | None = None
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class KieDriver(ProviderDriver):
    """Submit a KIE image task and poll it to completion."""

    provider_id: ClassVar[str] = "kie"
    display_name: ClassVar[str] = "KIE"
    api_key_env: ClassVar[str] = "KIE_API_KEY"

    api_url: str = "https://api.kie.ai/api/v1/jobs"
    model: str = "google/nano-banana-edit"
    output_format: str = "png"
    adjust_image_policy: AdjustImagePolicy = AdjustImagePolicy.MODEL
    timeout_seconds: float = 30.0
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    max_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS
    sleep: Sleep = asyncio.sleep
    log: logging.Logger = field(default_factory=lambda: logger)

    def build_payload(self, request: JewelryTryOnRequest) -> dict[str, Any]:
        jewelry_type = coerce_jewelry_type(request.jewelry_type)
        if request.action is JewelryAction.TRY_ON:
            if not request.model_image or not request.jewelry_image:
                raise InvalidRequestError("modelImage and jewelryImage are required")
            images = [request.model_image, request.jewelry_image]
            prompt = build_tryon_prompt(jewelry_type)
            size = TRY_ON_SIZE
        elif request.action is JewelryAction.ADJUST:
            images = self._adjust_images(request)
            prompt = build_adjust_prompt(
                jewelry_type, request.adjustment_type, request.params
            )
            size = ADJUST_SIZE
        else:  # pragma: no cover - JewelryAction is exhaustive
            raise InvalidRequestError("Invalid action")

        self.log.info(
            "kie.request.prepared action=%s jewelry_type=%s images=%s prompt_len=%s",
            request.action.value,
            jewelry_type.value,
            [describe_image_reference(image) for image in images],
            len(prompt),
        )
        return {
            "model": self.model,
            "input": {
                "prompt": prompt,
                "image_urls": [normalize_image_reference(image) for image in images],
                "output_format": self.output_format,
                "size": size,
            },
        }

    def _adjust_images(self, request: JewelryTryOnRequest) -> list[str]:
        if not request.model_image:
            raise InvalidRequestError("modelImage is required")
        if self.adjust_image_policy is AdjustImagePolicy.MODEL:
            return [request.model_image]
        if not request.jewelry_image:
            raise InvalidRequestError("jewelryImage is required for adjustments")
        return [request.model_image, request.jewelry_image]

    async def submit(
        self, client: httpx.AsyncClient, payload: dict[str, Any], *, api_key: str
    ) -> Submission:
        response = await client.post(
            f"{self.api_url}/createTask", headers=auth_headers(api_key), json=payload
        )
        if not 200 <= response.status_code < 300:
            body_text = read_error_body(response)
            self.log.error(
                "kie.job.create_failed status=%s body_preview=%s",
                response.status_code,
                body_text[:500],
            )
            raise ProviderCreationError(
                f"KIE error: {response.status_code} - {body_text}",
                status_code=response.status_code,
                body=body_text,
            )

        try:
            body = json_object(response)
        except ValueError as exc:
            raise ProviderCreationError(CREATION_FAILED_MESSAGE) from exc

        data = body.get("data") if isinstance(body.get("data"), dict) else {}
        if body.get("code") != KIE_SUCCESS_CODE:
            raise ProviderCreationError(str(body.get("msg") or CREATION_FAILED_MESSAGE))

        task_id = data.get("taskId")
        state = JobState.parse(data.get("status"))
        outputs = output_urls(data.get("output"))

        if state is JobState.COMPLETED and outputs:
            job_id = str(task_id or "")
            return Submission(
                job_id=job_id, result=TryOnResult(output_url=outputs[0], job_id=job_id)
            )
        if state is JobState.FAILED:
            raise ProviderCreationError(
                error_message(data.get("error")) or FAILED_FALLBACK_MESSAGE
            )
        if not task_id:
            raise ProviderCreationError(CREATION_FAILED_MESSAGE)

        self.log.info("kie.job.created job_id=%s", task_id)
        return Submission(job_id=str(task_id))

    async def check_status(
        self, client: httpx.AsyncClient, job_id: str, *, api_key: str
    ) -> StatusSnapshot:
        response = await client.post(
            f"{self.api_url}/recordInfo",
            headers=auth_headers(api_key),
            json={"taskId": job_id},
        )
        if not 200 <= response.status_code < 300:
            raise TransientPollError(
                f"KIE status check failed with status {response.status_code}"
            )
        data = json_object(response).get("data")
        if not isinstance(data, dict):
            raise TransientPollError("KIE status response carries no data")
        return StatusSnapshot(
            state=JobState.parse(data.get("status")),
            outputs=output_urls(data.get("output")),
            error=error_message(data.get("error")),
        )


__all__ = [
    "AdjustImagePolicy",
    "JewelryAction",
    "JewelryTryOnRequest",
    "KieDriver",
]
