"""
Applying an edited outline back onto the document it was extracted from.
"""

import logging
from typing import Dict, List

from config import log_event
from models import EditedHeadingEntry, HeadingRecord, ReconcileResult
from services.markdown import join_lines, split_lines
from services.outline_format import NEW_ID, format_heading, parse_outline


class StaleOutline(Exception):
    """The document no longer has the lines the outline was extracted from."""


def reconcile_outline(
    headings: List[HeadingRecord],
    edited_outline: str,
    content: str,
) -> ReconcileResult:
    """
    Patch the document's heading lines to match the edited outline.

    Ids that vanished from the outline delete their heading line, ids that
    survive rewrite theirs in place, and NEW entries are appended to the end
    of the document in outline order. Malformed outline lines and ids that
    were never handed out are ignored. Raises StaleOutline when a heading's
    line_index points past the end of ``content``.
    """
    entries = [e for e in parse_outline(edited_outline) if isinstance(e, EditedHeadingEntry)]

    new_headings: List[EditedHeadingEntry] = []
    edit_map: Dict[str, EditedHeadingEntry] = {}
    for entry in entries:
        if entry.id == NEW_ID:
            new_headings.append(entry)
        else:
            # last occurrence wins
            edit_map[entry.id] = entry

    edited_ids = {e.id for e in entries}
    deleted_ids = {h.id for h in headings} - edited_ids

    lines = split_lines(content)
    out_of_range = [h.line_index for h in headings if h.line_index >= len(lines)]
    if out_of_range:
        log_event(logging.WARNING, "outline_stale", lines=len(lines), last_heading_line=max(out_of_range))
        raise StaleOutline("Document changed since the outline was opened")

    lines_to_remove = []
    modified = 0

    for heading in headings:
        if heading.id in deleted_ids:
            lines_to_remove.append(heading.line_index)
            continue

        edited = edit_map.get(heading.id)
        if edited is None:
            continue
        # Untouched headings keep their original spacing
        if edited.level == heading.level and edited.text == heading.text:
            continue
        new_line = format_heading(edited.level, edited.text)
        if lines[heading.line_index] != new_line:
            lines[heading.line_index] = new_line
            modified += 1

    for line_index in sorted(lines_to_remove, reverse=True):
        del lines[line_index]

    for entry in new_headings:
        lines.append(format_heading(entry.level, entry.text))

    result = ReconcileResult(
        content=content,
        modified=modified,
        deleted=len(lines_to_remove),
        added=len(new_headings),
    )
    if result.changed:
        result.content = join_lines(lines)

    log_event(
        logging.INFO,
        "outline_reconciled",
        modified=result.modified,
        deleted=result.deleted,
        added=result.added,
        ignored=len(edit_map.keys() - {h.id for h in headings}),
    )
    return result
