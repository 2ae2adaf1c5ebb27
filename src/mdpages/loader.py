"""Layout and document loading.

Reads files through ``anyio.Path`` so a request only yields to other requests
at the file-read boundary. A missing file surfaces as ``FileNotFoundError``;
every other ``OSError`` and any renderer exception propagates unchanged.
Bytes that are not valid UTF-8 are decoded as U+FFFD rather than failing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import anyio
import structlog

from mdpages.models import Content
from mdpages.parser import extract_title
from mdpages.renderer import render_source

if TYPE_CHECKING:
    from pathlib import Path

    from mdpages.state import MiddlewareState

log = structlog.get_logger()


async def load_layout(state: MiddlewareState) -> str:
    """Return the layout template, read at most once when caching is enabled."""
    if state.cache is not None:
        cached = state.cache.get_layout()
        if cached is not None:
            return cached

    layout_path = anyio.Path(state.config.layout)
    layout = await layout_path.read_text(encoding="utf-8", errors="replace")
    log.debug("layout_loaded", path=str(state.config.layout), cached=state.cache is not None)

    if state.cache is not None:
        state.cache.set_layout(layout)
    return layout


async def load_content(file_path: Path, state: MiddlewareState) -> Content:
    """Read one Markdown document and derive its title and rendered body."""
    source = await anyio.Path(file_path).read_text(encoding="utf-8", errors="replace")
    return Content(
        title=extract_title(source),
        body=await render_source(state.renderer, source),
    )
