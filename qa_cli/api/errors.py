"""Transport failures of the report API."""

from typing import Any


class ApiError(Exception):
    """Raised when a request to the report API fails."""


class ApiConnectionError(ApiError):
    """Raised when the report API cannot be reached."""

    def __init__(
        self, message: str, *, host: str, port: int | None, refused: bool = False
    ) -> None:
        super().__init__(message)
        self.host = host
        self.port = port
        self.refused = refused


class ApiResponseError(ApiError):
    """Raised when the report API answers with a non-success status."""

    def __init__(self, url: str, status: int, body: Any) -> None:
        super().__init__(f"Request to {url} failed: {status}")
        self.url = url
        self.status = status
        self.body = body
