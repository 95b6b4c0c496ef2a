"""Rendering of formatted job results as terminal text."""

from collections.abc import Mapping

from qa_cli.ansi import (
    BLUE,
    CYAN,
    DIM,
    GREEN,
    GREY,
    MAGENTA,
    RED,
    RESET,
    YELLOW,
)
from qa_cli.models.record import FormattedResult, StatusKey

ERROR_DETAIL_LIMIT = 60

NO_DATA_MESSAGE = "No formatted data to display."

# Matched as substrings of the group name, first hit wins.
HEADER_COLORS: Mapping[str, str] = {
    "red": RED,
    "green": GREEN,
    "yellow": YELLOW,
    "blue": BLUE,
    "magenta": MAGENTA,
    "cyan": CYAN,
    "orange": YELLOW,
    "purple": MAGENTA,
    "black": GREY,
}

OTHER_HEADER_COLOR = CYAN

STATUS_COLORS: Mapping[StatusKey, str] = {
    "pass": GREEN,
    "fail": RED,
    "pending": YELLOW,
    "skipped": DIM,
}


def header_color(group: str) -> str:
    """Pick a display color for a group from the color word it contains."""
    name = group.lower()
    return next(
        (color for word, color in HEADER_COLORS.items() if word in name),
        OTHER_HEADER_COLOR,
    )


def render_report(result: FormattedResult | None) -> str:
    """Render a formatted result, one block per color group.

    Groups appear in mapping order; statuses always in pass, fail, pending,
    skipped order, and only when they hold records.
    """
    if not result:
        return f"{DIM}{NO_DATA_MESSAGE}{RESET}"

    lines: list[str] = []
    for group, bucket in result.items():
        lines.append("")
        lines.append(f"{header_color(group)}### Group: {group} ###{RESET}")

        for status, records in bucket.by_status():
            if not records:
                continue
            lines.append(
                f"  {STATUS_COLORS[status]}• {status.upper()} ({len(records)}){RESET}"
            )
            for record in records:
                lines.append(f"     [{record.id}] {record.value}")
                if record.error_details:
                    detail = record.error_details[:ERROR_DETAIL_LIMIT]
                    lines.append(f"{RED}       └> Error: {detail}...{RESET}")

    return "\n".join(lines)
