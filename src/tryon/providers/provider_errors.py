"""Error taxonomy shared by provider drivers and the HTTP layer."""

from __future__ import annotations

BODY_SNIPPET_LIMIT = 500


class TryOnError(Exception):
    """Base class for failures surfaced to the caller as ``{"error": ...}``."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UnauthorizedError(TryOnError):
    """Raised when the caller is not authenticated by the platform."""

    status_code = 401


class InvalidRequestError(TryOnError):
    """Raised when the inbound body does not match the route contract."""

    status_code = 400


class ProviderConfigurationError(TryOnError):
    """Raised when a provider API key is missing from the environment."""


class ProviderCreationError(TryOnError):
    """Raised when the provider rejects the job creation call."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str = "",
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.body = body[:BODY_SNIPPET_LIMIT]


class ProviderFailedError(TryOnError):
    """Raised when the provider explicitly reports the job as failed."""

    def __init__(self, message: str, *, job_id: str | None = None) -> None:
        super().__init__(message)
        self.job_id = job_id


class ProviderTimeoutError(TryOnError):
    """Raised when polling exhausts its attempts without a terminal status."""

    def __init__(self, message: str, *, job_id: str, attempts: int) -> None:
        super().__init__(message)
        self.job_id = job_id
        self.attempts = attempts


class TransientPollError(TryOnError):
    """A status check that may succeed on the next attempt."""


__all__ = [
    "BODY_SNIPPET_LIMIT",
    "InvalidRequestError",
    "ProviderConfigurationError",
    "ProviderCreationError",
    "ProviderFailedError",
    "ProviderTimeoutError",
    "TransientPollError",
    "TryOnError",
    "UnauthorizedError",
]
