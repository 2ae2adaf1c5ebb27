"""In-memory memo for the layout template and assembled pages.

One PageCache belongs to one middleware instance; nothing is process-global,
so two middleware instances never see each other's pages. Entries live for
the lifetime of the instance: there is no eviction, expiry or invalidation.

Concurrent first requests for the same document may both assemble the page
and both call ``set_page``. The last write wins; the values are identical
because rendering is assumed to be deterministic.
"""

from __future__ import annotations

import structlog

log = structlog.get_logger()


class PageCache:
    """Dict-backed cache implementing PageCacheProtocol."""

    def __init__(self) -> None:
        self._layout: str | None = None
        self._pages: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def get_layout(self) -> str | None:
        return self._layout

    def set_layout(self, layout: str) -> None:
        self._layout = layout

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def get_page(self, key: str) -> str | None:
        """Return the assembled page for a document path, or ``None`` on miss."""
        return self._pages.get(key)

    def set_page(self, key: str, html: str) -> None:
        if key in self._pages:
            log.debug("page_cache_overwrite", key=key)
        self._pages[key] = html

    def __len__(self) -> int:
        return len(self._pages)
