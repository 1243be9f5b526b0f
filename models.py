"""
Data structures (dataclasses) for Outline Loop.
"""

from dataclasses import dataclass
from typing import List


@dataclass
class HeadingRecord:
    """A heading line found during one extraction pass."""
    id: str  # H1, H2, ... in document order
    level: int  # 1 for #, 2 for ##, etc.
    text: str
    line_index: int  # position in the document's line list at extraction time


@dataclass
class EditedHeadingEntry:
    """One parsed line of the editable outline."""
    id: str  # an H<k> id or NEW
    level: int
    text: str


@dataclass
class MalformedLine:
    """An outline line that does not follow the <id>|<heading> format."""
    raw: str


@dataclass
class ReconcileResult:
    """Outcome of applying an edited outline to a document."""
    content: str
    modified: int = 0
    deleted: int = 0
    added: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.modified or self.deleted or self.added)

    @property
    def message(self) -> str:
        if not self.changed:
            return "No changes detected"
        return f"Outline updated: {self.modified} modified, {self.deleted} removed, {self.added} added"


@dataclass
class OutlineSession:
    """An open outline editor against one document."""
    id: str
    project: str
    headings: List[HeadingRecord]
    outline_text: str
    is_processing: bool = False
