"""Classified failures of a report run."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, kw_only=True)
class ConnectionRefused:
    """The API server refused the connection."""

    host: str
    port: int | None


@dataclass(frozen=True, kw_only=True)
class HttpError:
    """The API server answered with a non-success status."""

    status: int
    body: Any


@dataclass(frozen=True, kw_only=True)
class MessageError:
    """Any other exception, reported by its message."""

    message: str


@dataclass(frozen=True, kw_only=True)
class OpaqueError:
    """A failure value that is not an exception at all."""

    value: object


type Diagnostic = ConnectionRefused | HttpError | MessageError | OpaqueError
