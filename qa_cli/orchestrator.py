"""Orchestration of one report run: fetch, filter, submit, poll, render."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from qa_cli.api.base import ReportSource
from qa_cli.diagnostics import classify, log_diagnostic
from qa_cli.filtering import filter_by_color
from qa_cli.models.diagnostic import Diagnostic
from qa_cli.rendering import render_report

log = logging.getLogger(__name__)


class JobIdMissingError(Exception):
    """Raised when a submission response carries no job ID."""


@dataclass(frozen=True, kw_only=True)
class ReportOutcome:
    """Terminal state of a report run."""

    status: Literal["completed", "no_matches", "failed"]
    job_id: str | None = None
    report: str | None = None
    diagnostic: Diagnostic | None = None
    poll_attempts: int = 0


@dataclass(frozen=True, kw_only=True)
class ReportOrchestrator:
    """Runs the report pipeline against a single report source."""

    source: ReportSource
    max_poll_attempts: int = 10
    poll_interval: float = 2.0

    async def generate_report(self, colors: Sequence[str]) -> ReportOutcome:
        """Produce a rendered report for the records of the given colors.

        Never raises: failures are classified, logged and returned as a
        failed outcome. Cancellation is not intercepted.

        Args:
            colors: Color groups to include, matched case-insensitively

        Returns:
            Outcome holding the rendered report or the diagnostic

        """
        log.info("Filtering for colors: %s", ", ".join(colors))
        try:
            return await self._run(colors)
        except Exception as e:
            diagnostic = classify(e)
            log_diagnostic(log, diagnostic)
            return ReportOutcome(status="failed", diagnostic=diagnostic)

    async def _run(self, colors: Sequence[str]) -> ReportOutcome:
        log.info("Fetching data from /data...")
        records = await self.source.fetch_records()

        filtered = filter_by_color(records, colors)
        if not filtered:
            log.warning("No data found for the specified colors. Exiting.")
            return ReportOutcome(status="no_matches")
        log.info("Found %d items matching criteria", len(filtered))

        log.info("Submitting filtered data to /test-format...")
        job_id = await self.source.submit_tests(filtered)
        if not job_id:
            raise JobIdMissingError("Failed to get a Job ID from /test-format")
        log.info("Data submitted. Job ID: %s", job_id)

        log.info("Polling /retrieve for final data...")
        result, attempts = await self.source.wait_for_result(
            job_id,
            max_attempts=self.max_poll_attempts,
            poll_interval=self.poll_interval,
        )
        log.info("Job complete. Results retrieved after %d poll(s).", attempts)

        return ReportOutcome(
            status="completed",
            job_id=job_id,
            report=render_report(result),
            poll_attempts=attempts,
        )
