"""Abstract provider driver definition."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import httpx

from .job_models import Sleep, StatusSnapshot, Submission, TryOnResult
from .polling import JobPoller
from .provider_errors import ProviderConfigurationError

logger = logging.getLogger(__name__)


class ProviderDriver(ABC):
    """Base interface for asynchronous image-generation providers.

    Subclasses describe how to build the creation payload, submit it and read
    one status observation; :meth:`run` owns the lifecycle, sharing a single
    HTTP client between submission and the bounded poll loop.
    """

    provider_id: ClassVar[str]
    display_name: ClassVar[str]
    api_key_env: ClassVar[str]

    timeout_seconds: float
    poll_interval_seconds: float
    max_attempts: int
    sleep: Sleep

    def api_key(self) -> str:
        """Read the provider key from the environment for this invocation."""

        api_key = os.getenv(self.api_key_env)
        if not api_key:
            logger.error(
                "provider.config.missing_key provider=%s env=%s",
                self.provider_id,
                self.api_key_env,
            )
            raise ProviderConfigurationError(
                f"{self.display_name} service is not configured."
            )
        return api_key

    @abstractmethod
    def build_payload(self, request: Any) -> dict[str, Any]:
        """Construct the provider-specific creation body without performing I/O."""

    @abstractmethod
    async def submit(
        self, client: httpx.AsyncClient, payload: dict[str, Any], *, api_key: str
    ) -> Submission:
        """Issue exactly one creation call."""

    @abstractmethod
    async def check_status(
        self, client: httpx.AsyncClient, job_id: str, *, api_key: str
    ) -> StatusSnapshot:
        """Issue exactly one status call and classify its response."""

    async def run(self, request: Any, *, api_key: str) -> TryOnResult:
        payload = self.build_payload(request)
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            submission = await self.submit(client, payload, api_key=api_key)
            if submission.result is not None:
                logger.info(
                    "%s.job.immediate job_id=%s", self.provider_id, submission.job_id
                )
                return submission.result
            if submission.job_id is None:  # pragma: no cover - submit() guarantees one
                raise RuntimeError("submission carries neither a result nor a job id")

            async def check(job_id: str) -> StatusSnapshot:
                return await self.check_status(client, job_id, api_key=api_key)

            poller = JobPoller(
                provider=self.display_name,
                check_status=check,
                interval_seconds=self.poll_interval_seconds,
                max_attempts=self.max_attempts,
                sleep=self.sleep,
            )
            return await poller.wait_for(submission.job_id)


def auth_headers(api_key: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def read_error_body(response: httpx.Response) -> str:
    """Best-effort body text of a failed response; never raises."""

    try:
        return response.text
    except (httpx.HTTPError, httpx.StreamError, UnicodeDecodeError) as exc:
        logger.warning("provider.response.body_unreadable error=%s", exc)
        return "Unknown error"


def json_object(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object body; ``ValueError`` for anything else."""

    body = response.json()
    if not isinstance(body, dict):
        raise ValueError("response body is not a JSON object")
    return body


__all__ = [
    "ProviderDriver",
    "auth_headers",
    "json_object",
    "read_error_body",
]
