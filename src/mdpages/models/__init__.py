from __future__ import annotations

from mdpages.models.content import Content

__all__ = [
    "Content",
]
