"""Middleware state container.

MiddlewareState is created once per MarkdownMiddleware instance and passed to
every per-request function (resolver, loader, assembler). Its cache belongs
to that instance only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mdpages.cache import PageCache
from mdpages.renderer import build_renderer

if TYPE_CHECKING:
    from mdpages.config import MarkdownConfig
    from mdpages.protocols import PageCacheProtocol, RendererProtocol


@dataclass
class MiddlewareState:
    """Holds config, renderer and cache. Passed to every request handler."""

    config: MarkdownConfig
    renderer: RendererProtocol
    # None when config.cache is False: every request re-reads and re-renders
    cache: PageCacheProtocol | None = None


def build_state(config: MarkdownConfig) -> MiddlewareState:
    return MiddlewareState(
        config=config,
        renderer=build_renderer(config),
        cache=PageCache() if config.cache else None,
    )
