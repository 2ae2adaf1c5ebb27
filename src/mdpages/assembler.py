"""Page assembly: layout + title + body, memoized per document path.

Receives MiddlewareState, orchestrates cache lookup / layout load / document
load / substitution, and returns the finished HTML. No ASGI imports;
middleware.py handles the request wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mdpages.loader import load_content, load_layout

if TYPE_CHECKING:
    from pathlib import Path

    from mdpages.state import MiddlewareState


def substitute(template: str, holder: str, value: str) -> str:
    """Replace the first occurrence of ``holder`` in ``template`` with ``value``.

    The value is inserted literally: ``$&``, ``$1`` or ``\\1`` in it carry no
    special meaning. A template without the holder is returned unchanged.
    """
    prefix, found, suffix = template.partition(holder)
    if not found:
        return template
    return prefix + value + suffix


async def get_page(file_path: Path, state: MiddlewareState) -> str | None:
    """Return the assembled page for a document, or ``None`` if it does not exist.

    ``None`` is returned when either the document or the layout is missing,
    including paths that run through a regular file.
    Any other failure (permissions, disk errors, renderer errors) propagates.
    """
    key = str(file_path)
    log = structlog.get_logger().bind(path=key)

    if state.cache is not None:
        cached = state.cache.get_page(key)
        if cached is not None:
            log.debug("page_cache_hit")
            return cached

    try:
        layout = await load_layout(state)
        content = await load_content(file_path, state)
    except (FileNotFoundError, NotADirectoryError) as exc:
        # NotADirectoryError: a path segment is a file, e.g. "layout.html/x"
        log.debug("document_not_found", missing=exc.filename)
        return None

    config = state.config
    html = substitute(layout, config.title_holder, content.title)
    html = substitute(html, config.body_holder, content.body)

    log.info("page_rendered", title=content.title, cached=state.cache is not None)

    if state.cache is not None:
        state.cache.set_page(key, html)
    return html
