"""
Re-attaching outline ids to lines returned by the rewrite service.
"""

from typing import Callable, List

from services.outline_format import NEW_ID, split_prefix, with_id

# (original prefixed lines, rewritten bare lines) -> rewritten prefixed lines
Aligner = Callable[[List[str], List[str]], List[str]]


def align_positionally(original_lines: List[str], enhanced_lines: List[str]) -> List[str]:
    """
    Give the i-th enhanced line the id of the i-th original line.

    Lines past the end of the original outline are tagged NEW. An original
    line without an id prefix leaves its counterpart bare. No attempt is made
    to follow headings the service moved around.
    """
    result = []
    for index, enhanced in enumerate(enhanced_lines):
        if index >= len(original_lines):
            result.append(with_id(NEW_ID, enhanced))
            continue
        heading_id, _ = split_prefix(original_lines[index])
        result.append(with_id(heading_id, enhanced))
    return result
