"""Markdown renderers.

``MarkdownRenderer`` is the default engine, backed by Python-Markdown.
``FunctionRenderer`` adapts a plain callable supplied by the integrator to
``RendererProtocol``. ``build_renderer`` picks between them from config.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

import markdown
import structlog

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from mdpages.config import MarkdownConfig
    from mdpages.protocols import RendererProtocol

log = structlog.get_logger()


class MarkdownRenderer:
    """Render Markdown source to HTML with Python-Markdown.

    Keyword arguments are forwarded verbatim to ``markdown.Markdown`` so that
    extensions and their configs can be chosen by the caller::

        MarkdownRenderer(extensions=["tables", "fenced_code", "toc"])
    """

    def __init__(self, **md_options: Any) -> None:
        self._md = markdown.Markdown(**md_options)

    def render(self, source: str) -> str:
        # Markdown instances keep per-document state (toc, footnotes); reset
        # before every conversion.
        return self._md.reset().convert(source)


class FunctionRenderer:
    """Adapt a ``str -> str`` (or ``str -> Awaitable[str]``) callable."""

    def __init__(self, func: Callable[[str], str | Awaitable[str]]) -> None:
        self._func = func

    def render(self, source: str) -> str | Awaitable[str]:
        return self._func(source)


def build_renderer(config: MarkdownConfig) -> RendererProtocol:
    """Return the renderer configured for a middleware instance."""
    if config.render is None:
        log.debug("renderer_selected", renderer="markdown", md_options=sorted(config.md_options))
        return MarkdownRenderer(**config.md_options)
    if callable(getattr(config.render, "render", None)):
        return config.render
    return FunctionRenderer(config.render)


async def render_source(renderer: RendererProtocol, source: str) -> str:
    """Run a renderer, awaiting its result when it is awaitable."""
    result = renderer.render(source)
    if inspect.isawaitable(result):
        result = await result
    return result
