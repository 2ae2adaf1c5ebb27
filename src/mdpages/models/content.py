from __future__ import annotations

from pydantic import BaseModel


class Content(BaseModel):
    """One document read: extracted title plus rendered HTML body.

    Never cached on its own; only the assembled page is memoized.
    """

    title: str  # First line, heading marker removed
    body: str  # Rendered HTML of the whole document
