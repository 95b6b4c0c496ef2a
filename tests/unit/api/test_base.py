"""Tests for ReportSource base class."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from unittest.mock import AsyncMock, patch

import pytest

from qa_cli.api.base import PollTimeoutError, ReportSource
from qa_cli.models.record import FormattedResult, StatusBucket, TestRecord


@dataclass(frozen=True, kw_only=True)
class MockSource(ReportSource):
    """Test source that returns configurable poll responses."""

    poll_responses: Sequence[FormattedResult | None] = field(default_factory=list)
    polled_ids: list[str] = field(default_factory=list)

    async def fetch_records(self) -> Sequence[TestRecord]:  # pragma: no cover
        """Return no records."""
        return []

    async def submit_tests(
        self, records: Sequence[TestRecord]
    ) -> str | None:  # pragma: no cover
        """Return a mock job ID."""
        return "mock-job-123"

    async def poll_result(self, job_id: str) -> FormattedResult | None:
        """Return next response from poll_responses, then keep returning None."""
        idx = len(self.polled_ids)
        self.polled_ids.append(job_id)
        if idx < len(self.poll_responses):
            return self.poll_responses[idx]
        return None

    async def get_help(self) -> str:  # pragma: no cover
        """Return canned help."""
        return "help"


RESULT: FormattedResult = {"red": StatusBucket()}


class TestWaitForResult:
    """Tests for wait_for_result method."""

    async def test_returns_immediately_when_complete(self) -> None:
        """Returns the result when the first poll has it, without sleeping."""
        source = MockSource(poll_responses=[RESULT])

        with patch("qa_cli.api.base.asyncio.sleep", new_callable=AsyncMock) as sleep:
            result, attempts = await source.wait_for_result("job-1", poll_interval=1)

        assert result == RESULT
        assert attempts == 1
        sleep.assert_not_awaited()

    async def test_stops_on_third_poll(self) -> None:
        """Makes exactly three polls when the third returns the result."""
        third: FormattedResult = {"blue": StatusBucket()}
        source = MockSource(poll_responses=[None, None, third])

        result, attempts = await source.wait_for_result("job-1", poll_interval=0)

        assert result is third
        assert attempts == 3
        assert len(source.polled_ids) == 3

    async def test_raises_timeout_after_max_attempts(self) -> None:
        """Polls exactly max_attempts times and then times out."""
        source = MockSource()

        with pytest.raises(PollTimeoutError, match="after 10 attempts") as exc_info:
            await source.wait_for_result("job-1", poll_interval=0)

        assert len(source.polled_ids) == 10
        assert exc_info.value.attempts == 10
        assert exc_info.value.job_id == "job-1"

    async def test_sleeps_only_between_attempts(self) -> None:
        """Sleeps max_attempts - 1 times with the configured interval."""
        source = MockSource()

        with (
            patch("qa_cli.api.base.asyncio.sleep", new_callable=AsyncMock) as sleep,
            pytest.raises(PollTimeoutError),
        ):
            await source.wait_for_result("job-1", max_attempts=4, poll_interval=1.5)

        assert sleep.await_count == 3
        assert all(call.args == (1.5,) for call in sleep.await_args_list)

    async def test_empty_result_counts_as_complete(self) -> None:
        """A present but empty result ends polling."""
        source = MockSource(poll_responses=[None, {}])

        result, attempts = await source.wait_for_result("job-1", poll_interval=0)

        assert result == {}
        assert attempts == 2

    async def test_result_on_last_attempt_is_delivered(self) -> None:
        """A result arriving on the final attempt wins over the timeout."""
        source = MockSource(poll_responses=[None, None, RESULT])

        result, attempts = await source.wait_for_result(
            "job-1", max_attempts=3, poll_interval=0
        )

        assert result == RESULT
        assert attempts == 3
        assert len(source.polled_ids) == 3

    async def test_passes_job_id_to_every_poll(self) -> None:
        """Each poll carries the job ID."""
        source = MockSource(poll_responses=[None, RESULT])

        await source.wait_for_result("job-xyz", poll_interval=0)

        assert source.polled_ids == ["job-xyz", "job-xyz"]

    def test_timeout_error_is_a_timeout(self) -> None:
        """PollTimeoutError can be handled as a builtin TimeoutError."""
        assert issubclass(PollTimeoutError, TimeoutError)
