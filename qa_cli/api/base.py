"""Abstract base class for report API sources."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from qa_cli.models.record import FormattedResult, TestRecord
from qa_cli.polling import PollEffect, PollEvent, PollState, advance

log = logging.getLogger(__name__)


class PollTimeoutError(TimeoutError):
    """Raised when a job produced no result within the allowed attempts."""

    def __init__(self, job_id: str, attempts: int) -> None:
        super().__init__(f"Polling timed out after {attempts} attempts.")
        self.job_id = job_id
        self.attempts = attempts


@dataclass(frozen=True, kw_only=True)
class ReportSource(ABC):
    """Abstract source of test records and formatting jobs."""

    @abstractmethod
    async def fetch_records(self) -> Sequence[TestRecord]:
        """Fetch the full list of test records."""

    @abstractmethod
    async def submit_tests(self, records: Sequence[TestRecord]) -> str | None:
        """Submit records for formatting.

        Returns:
            Job ID, or None if the server did not return one

        """

    @abstractmethod
    async def poll_result(self, job_id: str) -> FormattedResult | None:
        """Check whether a job is done.

        Returns:
            The formatted result if complete, None if still processing

        """

    @abstractmethod
    async def get_help(self) -> str:
        """Fetch the server's help text."""

    async def wait_for_result(
        self,
        job_id: str,
        max_attempts: int = 10,
        poll_interval: float = 2.0,
    ) -> tuple[FormattedResult, int]:
        """Poll until the job is done or the attempt ceiling is reached.

        There is no delay before the first attempt nor after the last one.

        Args:
            job_id: ID returned from submit_tests
            max_attempts: Maximum number of poll calls (default: 10)
            poll_interval: Seconds between polls (default: 2)

        Returns:
            The formatted result and the number of poll calls made

        Raises:
            PollTimeoutError: If no result arrived after max_attempts polls

        """
        state = PollState(max_attempts=max_attempts)

        while True:
            attempt = state.attempt
            if (result := await self.poll_result(job_id)) is not None:
                return result, attempt

            state, effect = advance(state, PollEvent.PENDING)
            if effect is PollEffect.GIVE_UP:
                raise PollTimeoutError(job_id, attempt)

            log.info(
                "Processing... waiting %s second(s) (attempt %d/%d)",
                poll_interval,
                attempt,
                max_attempts,
            )
            await asyncio.sleep(poll_interval)
