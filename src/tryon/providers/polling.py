"""Bounded fixed-interval polling shared by the provider drivers.

Attempts are strictly sequential: wait the interval, issue one status check,
classify it. Transient problems (network errors, non-2xx status checks,
unparsable bodies, any unexpected exception) consume an attempt and the loop
goes on. A job the provider reports as failed aborts immediately with
:class:`ProviderFailedError`; running out of attempts raises
:class:`ProviderTimeoutError`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from .job_models import JobState, Sleep, StatusSnapshot, TryOnResult
from .provider_errors import (
    ProviderFailedError,
    ProviderTimeoutError,
    TransientPollError,
    TryOnError,
)

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_MAX_POLL_ATTEMPTS = 60

FAILED_FALLBACK_MESSAGE = "Processing failed."
TIMEOUT_MESSAGE = "Processing took too long. Please try again."

StatusCheck = Callable[[str], Awaitable[StatusSnapshot]]


@dataclass(slots=True)
class JobPoller:
    """Poll ``check_status`` until the job reaches a terminal state.

    Only :class:`TryOnError` subclasses other than :class:`TransientPollError`
    end the loop early; any other exception from a status check is logged and
    costs one attempt.
    """

    provider: str
    check_status: StatusCheck
    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    max_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS
    sleep: Sleep = asyncio.sleep
    log: logging.Logger = field(default_factory=lambda: logger)
    attempts: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.interval_seconds < 0:
            raise ValueError("interval_seconds must not be negative")

    async def wait_for(self, job_id: str) -> TryOnResult:
        self.attempts = 0
        while self.attempts < self.max_attempts:
            self.attempts += 1
            await self.sleep(self.interval_seconds)
            try:
                snapshot = await self.check_status(job_id)
            except TransientPollError as exc:
                self._log_transient(job_id, exc)
                continue
            except TryOnError:
                raise
            except Exception as exc:
                self._log_transient(job_id, exc)
                continue

            if snapshot.state is JobState.COMPLETED:
                if not snapshot.outputs:
                    raise ProviderFailedError(
                        f"{self.provider} finished without generating an image.",
                        job_id=job_id,
                    )
                self.log.info(
                    "poller.completed provider=%s job_id=%s attempts=%s",
                    self.provider,
                    job_id,
                    self.attempts,
                )
                return TryOnResult(output_url=snapshot.outputs[0], job_id=job_id)

            if snapshot.state is JobState.FAILED:
                self.log.warning(
                    "poller.failed provider=%s job_id=%s attempts=%s error=%s",
                    self.provider,
                    job_id,
                    self.attempts,
                    snapshot.error,
                )
                raise ProviderFailedError(
                    snapshot.error or FAILED_FALLBACK_MESSAGE, job_id=job_id
                )

        self.log.error(
            "poller.timeout provider=%s job_id=%s attempts=%s",
            self.provider,
            job_id,
            self.attempts,
        )
        raise ProviderTimeoutError(TIMEOUT_MESSAGE, job_id=job_id, attempts=self.attempts)

    def _log_transient(self, job_id: str, exc: Exception) -> None:
        self.log.warning(
            "poller.attempt.transient provider=%s job_id=%s attempt=%s error=%s: %s",
            self.provider,
            job_id,
            self.attempts,
            exc.__class__.__name__,
            exc,
        )


__all__ = [
    "DEFAULT_MAX_POLL_ATTEMPTS",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "FAILED_FALLBACK_MESSAGE",
    "JobPoller",
    "StatusCheck",
    "TIMEOUT_MESSAGE",
]
