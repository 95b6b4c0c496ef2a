"""Classification and reporting of failures."""

import json
import logging

from qa_cli.api.errors import ApiConnectionError, ApiResponseError
from qa_cli.models.diagnostic import (
    ConnectionRefused,
    Diagnostic,
    HttpError,
    MessageError,
    OpaqueError,
)


def classify(error: object) -> Diagnostic:
    """Classify a caught failure.

    A refused connection wins over an HTTP response, which wins over a plain
    exception message. Values that are not exceptions are kept as they are.
    """
    match error:
        case ApiConnectionError(refused=True, host=host, port=port):
            return ConnectionRefused(host=host, port=port)
        case ApiResponseError(status=status, body=body):
            return HttpError(status=status, body=body)
        case BaseException():
            return MessageError(message=str(error) or type(error).__name__)
        case _:
            return OpaqueError(value=error)


def log_diagnostic(log: logging.Logger, diagnostic: Diagnostic) -> None:
    """Log a diagnostic at error level."""
    log.error("--- ERROR ENCOUNTERED ---")
    match diagnostic:
        case ConnectionRefused(host=host, port=port):
            target = host if port is None else f"{host}:{port}"
            log.error("Connection refused. Is the server running at %s?", target)
        case HttpError(status=status, body=body):
            log.error("HTTP Status: %d", status)
            log.error("Data: %s", json.dumps(body, separators=(",", ":"), default=str))
        case MessageError(message=message):
            log.error("%s", message)
        case OpaqueError(value=value):
            log.error("An unknown error occurred: %r", value)
