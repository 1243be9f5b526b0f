"""
Tests for the editable outline line format and id re-attachment
(services/outline_format.py, services/alignment.py)
"""

import pytest

from models import EditedHeadingEntry, MalformedLine
from services.alignment import align_positionally
from services.outline_format import (
    parse_outline,
    parse_outline_line,
    split_prefix,
    strip_ids,
)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParseOutlineLine:

    def test_existing_id(self):
        assert parse_outline_line("H3|## Methods") == EditedHeadingEntry(id="H3", level=2, text="Methods")

    def test_new_id(self):
        assert parse_outline_line("NEW|# Appendix") == EditedHeadingEntry(id="NEW", level=1, text="Appendix")

    def test_space_after_pipe_and_trailing_space(self):
        entry = parse_outline_line("H1|   ###   Spaced   ")
        assert entry == EditedHeadingEntry(id="H1", level=3, text="Spaced")

    @pytest.mark.parametrize("line", [
        "## No id",
        "H1|No markers",
        "H1|#NoSpace",
        "H1|####### Too deep",
        "X1|# Bad id",
        "new|# lowercase sentinel",
        "H|# Missing number",
        " H1|# Leading space",
    ])
    def test_malformed(self, line):
        assert parse_outline_line(line) == MalformedLine(raw=line)

    def test_blank_lines_skipped(self):
        parsed = parse_outline("H1|# A\n\n   \ngarbage\nNEW|## B\n")

        assert parsed == [
            EditedHeadingEntry(id="H1", level=1, text="A"),
            MalformedLine(raw="garbage"),
            EditedHeadingEntry(id="NEW", level=2, text="B"),
        ]


class TestPrefixes:

    def test_split_prefix(self):
        assert split_prefix("H12|## Title") == ("H12", "## Title")
        assert split_prefix("NEW|# Added") == ("NEW", "# Added")
        assert split_prefix("# Bare") == (None, "# Bare")

    def test_strip_ids_passes_unprefixed_lines_through(self):
        outline = "H1|# A\nfree text\nNEW|## C\nH2|## B"
        assert strip_ids(outline) == "# A\nfree text\n## C\n## B"


# ---------------------------------------------------------------------------
# Positional alignment
# ---------------------------------------------------------------------------

class TestAlignPositionally:

    def test_extra_lines_become_new(self):
        result = align_positionally(
            ["H1|# A", "H2|## B"],
            ["# Alpha", "## Beta", "## Gamma"],
        )
        assert result == ["H1|# Alpha", "H2|## Beta", "NEW|## Gamma"]

    def test_alignment_ignores_content(self):
        # Service swapped the two headings; ids stay with positions
        result = align_positionally(["H1|# A", "H2|# B"], ["# B", "# A"])
        assert result == ["H1|# B", "H2|# A"]

    def test_fewer_lines_drop_trailing_ids(self):
        assert align_positionally(["H1|# A", "H2|# B", "H3|# C"], ["# Only"]) == ["H1|# Only"]

    def test_unprefixed_original_leaves_line_bare(self):
        result = align_positionally(["H1|# A", "note", "H2|# B"], ["# A", "# X", "# B"])
        assert result == ["H1|# A", "# X", "H2|# B"]

    def test_new_prefix_carried_forward(self):
        assert align_positionally(["NEW|# Draft"], ["# Final"]) == ["NEW|# Final"]

    def test_empty_original(self):
        assert align_positionally([], ["# A"]) == ["NEW|# A"]
