"""Command parsing and handlers shared by the CLI and the interactive shell."""

import argparse
import json
import logging
import sys
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from qa_cli.ansi import DIM, GREEN, RESET, YELLOW, strip_ansi
from qa_cli.api.client import ReportApiClient, endpoint_url
from qa_cli.config import ClientConfig
from qa_cli.diagnostics import classify, log_diagnostic
from qa_cli.filtering import parse_colors
from qa_cli.orchestrator import ReportOrchestrator, ReportOutcome

log = logging.getLogger(__name__)

HTTP_METHODS: Sequence[str] = ("GET", "POST", "PATCH", "DELETE")

EXAMPLES = """examples:
  qa-cli report -c green,yellow        report only the green and yellow groups
  qa-cli report -c "sky blue"          group names may contain spaces
  qa-cli api-info                      print the server API documentation
  qa-cli api-call GET data             show the raw, unfiltered data set
  qa-cli api-call POST retrieve -d '{"id": "job-123"}'
"""


def build_parser(
    parser_cls: type[argparse.ArgumentParser] = argparse.ArgumentParser,
) -> argparse.ArgumentParser:
    """Build the command parser; subcommand parsers share ``parser_cls``."""
    parser = parser_cls(
        prog="qa-cli",
        description=(
            "QA CLI - test result reporting and API utility. "
            "Run without arguments for interactive mode."
        ),
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # qa-cli report [-c COLORS] [--poll-interval S] [--max-attempts N]
    report_parser = subparsers.add_parser(
        "report",
        help="Generate a formatted test result report, filtered by color group",
    )
    report_parser.add_argument(
        "-c",
        "--colors",
        default="sky-blue",
        help="Comma-separated list of color groups to include (default: sky-blue)",
    )
    report_parser.add_argument(
        "--poll-interval",
        type=float,
        help="Seconds between result polls (default: QA_POLL_INTERVAL or 2)",
    )
    report_parser.add_argument(
        "--max-attempts",
        type=int,
        help="Maximum number of result polls (default: QA_MAX_POLL_ATTEMPTS or 10)",
    )

    # qa-cli api-info
    subparsers.add_parser(
        "api-info",
        help="Retrieve and display help text from the server API",
    )

    # qa-cli api-call METHOD ENDPOINT [-d JSON]
    call_parser = subparsers.add_parser(
        "api-call",
        help="Execute a raw HTTP request against the server",
    )
    call_parser.add_argument(
        "method", type=str.upper, choices=HTTP_METHODS, help="HTTP method to use"
    )
    call_parser.add_argument(
        "endpoint", help="Server path, e.g. /data or help"
    )
    call_parser.add_argument(
        "-d", "--data", help="JSON payload for POST/PATCH requests"
    )

    return parser


def resolve_config(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    environ: Mapping[str, str] | None = None,
) -> ClientConfig:
    """Merge environment configuration with command line flags.

    Invalid values are reported through ``parser.error``.
    """
    color = False if args.no_color or not sys.stdout.isatty() else None
    try:
        return ClientConfig.from_env(
            environ,
            poll_interval=getattr(args, "poll_interval", None),
            max_poll_attempts=getattr(args, "max_attempts", None),
            color=color,
        )
    except ValidationError as e:
        parser.error(str(e))


def emit(text: str, config: ClientConfig) -> None:
    """Write command output to stdout."""
    print(text if config.color else strip_ansi(text))


async def run_report(config: ClientConfig, colors: Sequence[str]) -> ReportOutcome:
    """Run the report pipeline and print the rendered report."""
    log.info("Initiating report process. Filter: [%s]", ", ".join(colors))

    async with ReportApiClient.from_config(config) as client:
        orchestrator = ReportOrchestrator(
            source=client,
            max_poll_attempts=config.max_poll_attempts,
            poll_interval=config.poll_interval,
        )
        outcome = await orchestrator.generate_report(colors)

    if outcome.report is not None:
        emit(outcome.report, config)
    return outcome


async def run_api_info(config: ClientConfig) -> None:
    """Print the server's help text."""
    log.info("Fetching help from API server...")
    try:
        async with ReportApiClient.from_config(config) as client:
            text = await client.get_help()
    except Exception as e:
        log_diagnostic(log, classify(e))
        return

    emit(f"{GREEN}Server API Information:{RESET}\n{text}", config)


async def run_api_call(
    config: ClientConfig, method: str, endpoint: str, data: str | None = None
) -> None:
    """Send a raw request and print the status and body."""
    try:
        payload: Any = json.loads(data) if data else None
        url = endpoint_url(config.api_base_url, endpoint)
        emit(f"{YELLOW}Sending {method} to {url}...{RESET}", config)

        async with ReportApiClient.from_config(config) as client:
            status, body = await client.request(method, endpoint, payload)
    except Exception as e:
        log_diagnostic(log, classify(e))
        return

    emit(f"{GREEN}Status: {status}{RESET}", config)
    if isinstance(body, str):
        emit(body if body else f"{DIM}(empty body){RESET}", config)
    else:
        emit(json.dumps(body, indent=2), config)


async def dispatch(args: argparse.Namespace, config: ClientConfig) -> None:
    """Run the handler for a parsed command."""
    match args.command:
        case "report":
            await run_report(config, parse_colors(args.colors))
        case "api-info":
            await run_api_info(config)
        case "api-call":
            await run_api_call(config, args.method, args.endpoint, args.data)
        case _:
            raise ValueError(f"Unknown command: {args.command}")
