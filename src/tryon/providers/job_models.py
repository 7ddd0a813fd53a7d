"""Value types describing a provider job and its outcome."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Awaitable, Callable

Sleep = Callable[[float], Awaitable[None]]


class JobState(StrEnum):
    """Provider job lifecycle; ``completed`` and ``failed`` are terminal."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def parse(cls, raw: Any) -> "JobState":
        """Anything that is not an explicit terminal status counts as pending."""

        if raw == cls.COMPLETED.value:
            return cls.COMPLETED
        if raw == cls.FAILED.value:
            return cls.FAILED
        return cls.PENDING


@dataclass(slots=True, frozen=True)
class TryOnResult:
    """Normalised output returned to the caller."""

    output_url: str
    job_id: str


@dataclass(slots=True, frozen=True)
class Submission:
    """Outcome of a creation call: a job to poll, or an immediate result."""

    job_id: str | None
    result: TryOnResult | None = None


@dataclass(slots=True, frozen=True)
class StatusSnapshot:
    """One observation of a provider job."""

    state: JobState
    outputs: tuple[str, ...] = ()
    error: str | None = None


def output_urls(raw: Any) -> tuple[str, ...]:
    """Non-empty string entries of a provider ``output`` list."""

    if not isinstance(raw, list):
        return ()
    return tuple(item for item in raw if isinstance(item, str) and item)


def error_message(raw: Any) -> str | None:
    """Provider error text; some providers send ``{"name", "message"}`` objects."""

    if isinstance(raw, str):
        return raw or None
    if isinstance(raw, dict):
        message = raw.get("message") or raw.get("name")
        return str(message) if message else None
    return None


__all__ = [
    "JobState",
    "Sleep",
    "StatusSnapshot",
    "Submission",
    "TryOnResult",
    "error_message",
    "output_urls",
]
