"""Heading-delimited section scanning over markdown lines."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

# "#### FR-12: Title" style requirement headings inside an SRS.
REQUIREMENT_HEADING = re.compile(r"^####\s+((?:FR|NFR)-\d+):\s+.+$")
# Any heading of level 1-4 closes the current requirement block.
HEADING_BOUNDARY = re.compile(r"^#{1,4}\s+")


def iter_sections(
    lines: Iterable[str],
    heading: re.Pattern[str],
    boundary: re.Pattern[str],
) -> Iterator[tuple[str, str]]:
    """Yield ``(identifier, block_text)`` for every block opened by ``heading``.

    The identifier is the heading's first capture group. A block runs from its
    heading up to, not including, the next line matching ``boundary``. That
    closing line is then tested as a heading itself, so back-to-back blocks are
    all reported.
    """
    current: str | None = None
    block: list[str] = []
    for line in lines:
        if current is not None:
            if not boundary.match(line):
                block.append(line)
                continue
            yield current, "\n".join(block)
            current = None
        m = heading.match(line)
        if m:
            current = m.group(1)
            block = [line]
    if current is not None:
        yield current, "\n".join(block)


def is_attribute_row(line: str) -> bool:
    """Table rows of the form ``| **Label** | value |``."""
    stripped = line.strip()
    return stripped.startswith("|") and "**" in stripped


def attribute_label(line: str) -> str:
    parts = line.split("**")
    return parts[1].strip() if len(parts) > 2 else ""
