"""
Markdown document operations: heading extraction and whole-file read/write.
"""

import re
import logging
from typing import List

import config
from config import log_event, get_project_path
from models import HeadingRecord

HEADING_PATTERN = re.compile(r'^(#{1,6})\s+(.+)$')


class NoActiveDocument(Exception):
    """Raised when the requested document is not available."""

    def __init__(self, project_name: str = ""):
        self.project_name = project_name
        super().__init__("No active markdown file")


def split_lines(content: str) -> List[str]:
    return content.split('\n')


def join_lines(lines: List[str]) -> str:
    return '\n'.join(lines)


def extract_headings(content: str) -> List[HeadingRecord]:
    """
    Scan the document for heading lines.
    Ids are assigned H1..Hn in document order and restart on every call.
    """
    headings = []
    for index, line in enumerate(split_lines(content)):
        match = HEADING_PATTERN.match(line)
        if not match:
            continue
        text = match.group(2).strip()
        # "#   " matches the pattern but carries no title
        if not text:
            continue
        headings.append(HeadingRecord(
            id=f"H{len(headings) + 1}",
            level=len(match.group(1)),
            text=text,
            line_index=index,
        ))

    log_event(logging.DEBUG, "outline_extracted", headings=len(headings))
    return headings


# --- DOCUMENT SOURCE / SINK ---

def read_document(project_name: str) -> str:
    """Read the whole document. Raises NoActiveDocument if it is missing."""
    path = get_project_path(project_name)
    if not path.exists():
        log_event(logging.WARNING, "document_missing", project=project_name, path=str(path))
        raise NoActiveDocument(project_name)
    content = path.read_text(encoding='utf-8')
    log_event(logging.DEBUG, "document_read", project=project_name, bytes=len(content))
    return content


def write_document(project_name: str, content: str):
    """Replace the whole document with content."""
    path = get_project_path(project_name)
    path.write_text(content, encoding='utf-8')
    log_event(logging.INFO, "document_written", project=project_name, bytes=len(content))


def list_documents() -> List[str]:
    """Slugs of the documents available for editing."""
    return sorted(p.stem for p in config.PROJECTS_DIR.glob("*.md"))
