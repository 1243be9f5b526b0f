"""
The editable outline line format.

Each line of the outline shown to the user (or sent back by the rewrite
service) reads ``<ID>|<marker-run> <heading text>`` where ``<ID>`` is either
an ``H<k>`` id handed out by extraction or the literal ``NEW`` for a heading
that did not exist before.
"""

import re
from typing import Iterable, List, Optional, Tuple, Union

from models import EditedHeadingEntry, HeadingRecord, MalformedLine

NEW_ID = "NEW"
MARKER = "#"

ENTRY_PATTERN = re.compile(r'^(H\d+|NEW)\|\s*(#{1,6})\s+(.+)$')
PREFIX_PATTERN = re.compile(r'^(H\d+|NEW)\|(.*)$')

OutlineLine = Union[EditedHeadingEntry, MalformedLine]


def format_heading(level: int, text: str) -> str:
    """Rebuild a document heading line."""
    return f"{MARKER * level} {text}"


def format_outline_line(heading_id: str, level: int, text: str) -> str:
    return f"{heading_id}|{format_heading(level, text)}"


def serialize_outline(headings: Iterable[HeadingRecord]) -> str:
    return '\n'.join(format_outline_line(h.id, h.level, h.text) for h in headings)


def non_blank_lines(text: str) -> List[str]:
    return [line for line in text.split('\n') if line.strip()]


def parse_outline_line(line: str) -> OutlineLine:
    match = ENTRY_PATTERN.match(line)
    if not match:
        return MalformedLine(raw=line)
    return EditedHeadingEntry(
        id=match.group(1),
        level=len(match.group(2)),
        text=match.group(3).strip(),
    )


def parse_outline(text: str) -> List[OutlineLine]:
    """Parse every non-blank line; malformed lines are kept as MalformedLine."""
    return [parse_outline_line(line) for line in non_blank_lines(text)]


def split_prefix(line: str) -> Tuple[Optional[str], str]:
    """Split ``H3|## Title`` into ("H3", "## Title"); (None, line) if unprefixed."""
    match = PREFIX_PATTERN.match(line)
    if not match:
        return None, line
    return match.group(1), match.group(2)


def strip_ids(text: str) -> str:
    """Drop every id prefix so the outline can leave the process."""
    return '\n'.join(split_prefix(line)[1] for line in text.split('\n'))


def with_id(heading_id: Optional[str], line: str) -> str:
    return f"{heading_id}|{line}" if heading_id else line
