"""Interactive command loop."""

import argparse
import asyncio
import logging
import shlex
import sys
from collections.abc import Callable, Mapping
from typing import NoReturn

from qa_cli.ansi import CYAN, DIM, RESET
from qa_cli.commands import build_parser, dispatch, resolve_config

log = logging.getLogger(__name__)

PROMPT = f"{CYAN}qa> {RESET}"

QUIT_COMMANDS = frozenset({"q", "quit", "exit"})

BANNER = (
    f"{CYAN}QA CLI - test result reporting and API utility{RESET}\n"
    f'{DIM}Type "report -c red,blue" or "api-call GET help". '
    f'Type "q" to exit.{RESET}'
)


class CommandError(Exception):
    """Raised instead of exiting when a command line cannot be parsed."""


class CommandExit(Exception):
    """Raised instead of exiting after --help or similar actions."""


class ShellArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports problems by raising, so the loop survives."""

    def error(self, message: str) -> NoReturn:
        raise CommandError(message)

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        if message:
            self._print_message(message, sys.stderr)
        raise CommandExit(status)


def execute_line(
    parser: argparse.ArgumentParser,
    line: str,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Parse one command line and run it like the non-interactive CLI would."""
    try:
        args = parser.parse_args(shlex.split(line))
        config = resolve_config(parser, args, environ)
    except (CommandError, ValueError) as e:
        log.error("--- CLI PARSING ERROR ---")
        log.error("%s", e)
        log.error("Use '--help' for a list of valid commands.")
        return
    except CommandExit:
        return

    try:
        asyncio.run(dispatch(args, config))
    except KeyboardInterrupt:
        log.warning("Command cancelled.")


def run_shell(
    read_line: Callable[[str], str] = input,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Prompt for commands until the user quits or input ends."""
    parser = build_parser(ShellArgumentParser)
    print(BANNER)

    while True:
        try:
            line = read_line(PROMPT).strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not line:
            continue
        if line.lower() in QUIT_COMMANDS:
            break

        execute_line(parser, line, environ)
