"""Selection of test records by color group."""

from collections.abc import Iterable, Sequence

from qa_cli.models.record import TestRecord

DEFAULT_COLORS: Sequence[str] = ("sky-blue",)


def filter_by_color(
    records: Iterable[TestRecord], colors: Iterable[str]
) -> list[TestRecord]:
    """Keep records whose color equals one of ``colors``, ignoring case.

    Original order is preserved. No colors means no records.
    """
    wanted = {color.casefold() for color in colors}
    return [record for record in records if record.color.casefold() in wanted]


def parse_colors(colors: str | None) -> Sequence[str]:
    """Parse a comma-separated color list, falling back to the default."""
    parsed = tuple(c.strip() for c in (colors or "").split(",") if c.strip())
    return parsed or DEFAULT_COLORS
