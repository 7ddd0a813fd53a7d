from __future__ import annotations

import httpx
import pytest

from src.tryon.providers.job_models import JobState, StatusSnapshot
from src.tryon.providers.polling import (
    DEFAULT_MAX_POLL_ATTEMPTS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    TIMEOUT_MESSAGE,
    JobPoller,
)
from src.tryon.providers.provider_errors import (
    ProviderFailedError,
    ProviderTimeoutError,
    TransientPollError,
)


class ScriptedStatus:
    """Status endpoint replaying a script; the last entry repeats forever."""

    def __init__(self, *script: StatusSnapshot | Exception) -> None:
        self.script = list(script)
        self.calls = 0

    async def __call__(self, job_id: str) -> StatusSnapshot:
        self.calls += 1
        index = min(self.calls, len(self.script)) - 1
        item = self.script[index]
        if isinstance(item, Exception):
            raise item
        return item


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


PENDING = StatusSnapshot(state=JobState.PENDING)
DONE = StatusSnapshot(state=JobState.COMPLETED, outputs=("https://cdn/out.jpg",))


def make_poller(status: ScriptedStatus, *, max_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS) -> JobPoller:
    return JobPoller(
        provider="TEST",
        check_status=status,
        max_attempts=max_attempts,
        sleep=RecordingSleep(),
    )


def test_defaults_match_two_minute_ceiling() -> None:
    assert DEFAULT_POLL_INTERVAL_SECONDS == 2.0
    assert DEFAULT_MAX_POLL_ATTEMPTS == 60


@pytest.mark.asyncio
@pytest.mark.parametrize("n", [1, 5, 59])
async def test_completed_on_attempt_n_returns_after_exactly_n_calls(n: int) -> None:
    status = ScriptedStatus(*([PENDING] * (n - 1)), DONE)
    poller = make_poller(status)

    result = await poller.wait_for("job-1")

    assert result.output_url == "https://cdn/out.jpg"
    assert result.job_id == "job-1"
    assert status.calls == n
    assert poller.attempts == n


@pytest.mark.asyncio
async def test_failed_status_aborts_without_further_calls() -> None:
    failed = StatusSnapshot(state=JobState.FAILED, error="NSFW content detected")
    status = ScriptedStatus(PENDING, PENDING, failed, DONE)
    poller = make_poller(status)

    with pytest.raises(ProviderFailedError) as excinfo:
        await poller.wait_for("job-2")

    assert str(excinfo.value) == "NSFW content detected"
    assert excinfo.value.job_id == "job-2"
    assert status.calls == 3


@pytest.mark.asyncio
async def test_failed_status_without_message_uses_fallback() -> None:
    status = ScriptedStatus(StatusSnapshot(state=JobState.FAILED))

    with pytest.raises(ProviderFailedError, match="Processing failed."):
        await make_poller(status).wait_for("job-3")


@pytest.mark.asyncio
async def test_always_pending_times_out_after_exactly_max_attempts() -> None:
    status = ScriptedStatus(PENDING)
    poller = make_poller(status)

    with pytest.raises(ProviderTimeoutError) as excinfo:
        await poller.wait_for("job-4")

    assert status.calls == 60
    assert excinfo.value.attempts == 60
    assert str(excinfo.value) == TIMEOUT_MESSAGE
    assert not isinstance(excinfo.value, ProviderFailedError)


@pytest.mark.asyncio
async def test_transient_errors_then_success() -> None:
    request = httpx.Request("GET", "https://provider/status/job-5")
    status = ScriptedStatus(
        httpx.ConnectError("connection reset", request=request),
        TransientPollError("status check failed with status 503"),
        DONE,
    )
    poller = make_poller(status)

    result = await poller.wait_for("job-5")

    assert result.output_url == "https://cdn/out.jpg"
    assert status.calls == 3


@pytest.mark.asyncio
async def test_unparsable_body_is_transient() -> None:
    status = ScriptedStatus(ValueError("Expecting value"), DONE)

    result = await make_poller(status).wait_for("job-6")

    assert result.job_id == "job-6"
    assert status.calls == 2


@pytest.mark.asyncio
async def test_transient_errors_consume_attempts() -> None:
    status = ScriptedStatus(TransientPollError("502"))

    with pytest.raises(ProviderTimeoutError):
        await make_poller(status, max_attempts=4).wait_for("job-7")

    assert status.calls == 4


@pytest.mark.asyncio
async def test_fatal_error_raised_by_status_check_is_not_swallowed() -> None:
    status = ScriptedStatus(ProviderFailedError("quota exhausted"), DONE)

    with pytest.raises(ProviderFailedError, match="quota exhausted"):
        await make_poller(status).wait_for("job-8")

    assert status.calls == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        httpx.StreamNotRead(),
        RuntimeError("event loop hiccup"),
        KeyError("status"),
    ],
)
async def test_unexpected_status_check_error_is_retried(error: Exception) -> None:
    status = ScriptedStatus(error, DONE)

    result = await make_poller(status).wait_for("job-11")

    assert result.output_url == "https://cdn/out.jpg"
    assert status.calls == 2


@pytest.mark.asyncio
async def test_timeout_error_raised_by_status_check_is_not_retried() -> None:
    raised = ProviderTimeoutError("gave up", job_id="job-12", attempts=1)
    status = ScriptedStatus(raised, DONE)

    with pytest.raises(ProviderTimeoutError):
        await make_poller(status).wait_for("job-12")

    assert status.calls == 1


@pytest.mark.asyncio
async def test_outcome_fields_appear_in_formatted_log_messages(caplog) -> None:
    failed = StatusSnapshot(state=JobState.FAILED, error="NSFW content detected")
    caplog.set_level("INFO", logger="src.tryon.providers.polling")

    await make_poller(ScriptedStatus(DONE)).wait_for("job-13")
    with pytest.raises(ProviderFailedError):
        await make_poller(ScriptedStatus(failed)).wait_for("job-14")
    with pytest.raises(ProviderTimeoutError):
        await make_poller(ScriptedStatus(PENDING), max_attempts=2).wait_for("job-15")

    messages = [record.getMessage() for record in caplog.records]
    assert "poller.completed provider=TEST job_id=job-13 attempts=1" in messages
    assert (
        "poller.failed provider=TEST job_id=job-14 attempts=1 error=NSFW content detected"
        in messages
    )
    assert "poller.timeout provider=TEST job_id=job-15 attempts=2" in messages


@pytest.mark.asyncio
async def test_completed_without_output_is_terminal_failure() -> None:
    status = ScriptedStatus(StatusSnapshot(state=JobState.COMPLETED), DONE)

    with pytest.raises(ProviderFailedError, match="without generating an image"):
        await make_poller(status).wait_for("job-9")

    assert status.calls == 1


@pytest.mark.asyncio
async def test_waits_the_interval_before_every_check() -> None:
    status = ScriptedStatus(PENDING, PENDING, DONE)
    sleep = RecordingSleep()
    poller = JobPoller(provider="TEST", check_status=status, interval_seconds=0.5, sleep=sleep)

    await poller.wait_for("job-10")

    assert sleep.delays == [0.5, 0.5, 0.5]


def test_rejects_non_positive_attempt_budget() -> None:
    with pytest.raises(ValueError):
        JobPoller(provider="TEST", check_status=ScriptedStatus(DONE), max_attempts=0)
