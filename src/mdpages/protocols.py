"""Protocol interfaces for swappable components.

The loader, assembler and MiddlewareState reference these protocols, not the
concrete implementations. This allows:
- Callers to plug in any Markdown engine without touching the middleware
- Tests to use recording renderers and in-memory caches
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Protocol


class RendererProtocol(Protocol):
    """Turns raw document text into HTML markup.

    ``render`` may return the markup directly or an awaitable resolving to it.
    Exceptions raised by a renderer propagate to the host framework unchanged.
    """

    def render(self, source: str) -> str | Awaitable[str]: ...


class PageCacheProtocol(Protocol):
    """Interface for the per-middleware memo of layout and assembled pages."""

    def get_layout(self) -> str | None: ...

    def set_layout(self, layout: str) -> None: ...

    def get_page(self, key: str) -> str | None: ...

    def set_page(self, key: str, html: str) -> None: ...
