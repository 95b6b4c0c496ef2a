"""aiohttp implementation of the report API."""

import errno
import json
import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from yarl import URL

from qa_cli.api.base import ReportSource
from qa_cli.api.errors import ApiConnectionError, ApiError, ApiResponseError
from qa_cli.api.models import DataResponse, RetrieveResponse, SubmitResponse
from qa_cli.config import ClientConfig
from qa_cli.models.record import FormattedResult, TestRecord

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ReportApiClient(ReportSource):
    """Report API client over a single aiohttp session.

    Endpoints are resolved relative to ``config.api_base_url``.
    """

    config: ClientConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: ClientConfig
    ) -> AsyncGenerator["ReportApiClient", None]:
        """Create client with managed session lifecycle."""
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            timeout=aiohttp.ClientTimeout(total=config.request_timeout),
        ) as session:
            yield cls(config=config, session=session)

    async def fetch_records(self) -> Sequence[TestRecord]:
        """Fetch all records from GET /data."""
        _, body = await self.request("GET", "data")
        return DataResponse.model_validate(body).data

    async def submit_tests(self, records: Sequence[TestRecord]) -> str | None:
        """Submit records to POST /test-format and return the job ID."""
        _, body = await self.request(
            "POST", "test-format", {"tests": [record.to_wire() for record in records]}
        )
        response = SubmitResponse.model_validate(body)
        return str(response.id) if response.id else None

    async def poll_result(self, job_id: str) -> FormattedResult | None:
        """Ask POST /retrieve for the job result."""
        _, body = await self.request("POST", "retrieve", {"id": job_id})
        return RetrieveResponse.model_validate(body).file

    async def get_help(self) -> str:
        """Fetch help text from GET /help."""
        _, body = await self.request("GET", "help")
        return body if isinstance(body, str) else json.dumps(body, indent=2)

    async def request(
        self, method: str, endpoint: str, payload: Any = None
    ) -> tuple[int, Any]:
        """Send a request and return the status and decoded body.

        Args:
            method: HTTP method
            endpoint: Path relative to the API base URL, leading slash optional
            payload: JSON body, omitted when None

        Returns:
            Status code and the body, parsed as JSON when the server says so

        Raises:
            ApiConnectionError: If the server could not be reached
            ApiResponseError: If the server answered with a 4xx/5xx status
            ApiError: For any other transport failure
            ValueError: If endpoint is an absolute URL

        """
        url = endpoint_url(self.config.api_base_url, endpoint)
        path = endpoint.lstrip("/")
        base = URL(self.config.api_base_url)

        log.debug("%s %s", method, url)
        try:
            async with self.session.request(method, path, json=payload) as response:
                status = response.status
                body = await read_body(response)
        except aiohttp.ClientConnectorError as e:
            raise ApiConnectionError(
                str(e), host=e.host, port=e.port, refused=is_refused(e.os_error)
            ) from e
        except TimeoutError as e:
            raise ApiConnectionError(
                f"Request to {url} timed out after {self.config.request_timeout}s",
                host=base.host or "",
                port=base.port,
            ) from e
        except aiohttp.ClientError as e:
            raise ApiError(f"Request to {url} failed: {e}") from e

        if status >= 400:
            raise ApiResponseError(url, status, body)

        return status, body


def endpoint_url(base_url: str, endpoint: str) -> str:
    """Return the URL a request for a server path is sent to.

    Raises:
        ValueError: If endpoint is an absolute URL rather than a server path

    """
    if URL(endpoint).absolute:
        raise ValueError(f"Endpoint must be a server path, got {endpoint!r}")
    return f"{base_url}{endpoint.lstrip('/')}"


async def read_body(response: aiohttp.ClientResponse) -> Any:
    """Decode a response body as JSON when declared so, else as text."""
    text = await response.text()
    if response.content_type != "application/json":
        return text
    try:
        return json.loads(text)
    except ValueError:
        return text


def is_refused(error: OSError) -> bool:
    """Check whether a connect failure was a refused connection.

    When several addresses were tried, asyncio folds the failures into one
    OSError without errno, so the message is checked as well.
    """
    return (
        isinstance(error, ConnectionRefusedError)
        or error.errno == errno.ECONNREFUSED
        or f"[Errno {errno.ECONNREFUSED}]" in str(error)
    )
