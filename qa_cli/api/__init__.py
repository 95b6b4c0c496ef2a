"""Report API access."""

from qa_cli.api.base import PollTimeoutError, ReportSource
from qa_cli.api.client import ReportApiClient
from qa_cli.api.errors import ApiConnectionError, ApiError, ApiResponseError

__all__ = [
    "ApiConnectionError",
    "ApiError",
    "ApiResponseError",
    "PollTimeoutError",
    "ReportApiClient",
    "ReportSource",
]
