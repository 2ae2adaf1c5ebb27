"""Title extraction for Markdown documents.

The page title is the document's first line with surrounding whitespace and
any leading Markdown heading marker removed. Documents without a heading on
the first line still get that line as their title, verbatim.
"""

from __future__ import annotations

import re

_HEADING_MARKER_RE = re.compile(r"^[#\s]+")


def extract_title(content: str) -> str:
    """Return the title for a Markdown document.

    ``"# Hello\\nBody"`` and ``"Hello\\nBody"`` both yield ``"Hello"``.
    A document without any line break uses its whole text as the first line.
    """
    first_line, _, _ = content.partition("\n")
    return _HEADING_MARKER_RE.sub("", first_line.strip())
