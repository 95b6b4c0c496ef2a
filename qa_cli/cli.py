"""CLI entry point for the QA report client."""

import asyncio
import logging
import sys
from collections.abc import Sequence

from qa_cli.commands import build_parser, dispatch, resolve_config
from qa_cli.shell import run_shell


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point.

    With arguments, runs one command. Without, starts the interactive shell.
    Only argument errors end with a non-zero exit status.
    """
    args_list = list(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if not args_list:
        run_shell()
        return

    parser = build_parser()
    args = parser.parse_args(args_list)
    config = resolve_config(parser, args)

    try:
        asyncio.run(dispatch(args, config))
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":  # pragma: no cover
    main()
