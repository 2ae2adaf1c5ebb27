"""Pure ASGI middleware that serves Markdown documents as HTML pages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from starlette.responses import HTMLResponse

from mdpages.assembler import get_page
from mdpages.config import build_config
from mdpages.resolver import resolve_document_path
from mdpages.state import build_state

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

    from mdpages.config import MarkdownConfig

log = structlog.get_logger()


class MarkdownMiddleware:
    """Pure ASGI middleware rendering ``<root>/**/*.md`` under ``base_url``.

    For every HTTP ``GET`` below ``base_url`` the matching Markdown document is
    rendered, wrapped in the layout template and returned as ``text/html``.
    Everything else is handed to the wrapped app untouched:
    1. Non-HTTP scopes and non-GET methods.
    2. Paths outside ``base_url``.
    3. Documents (or a layout) that do not exist on disk.

    Implemented as pure ASGI (not BaseHTTPMiddleware) so that declined
    requests, including streaming responses, are never buffered by this layer.

    Options are either a ready ``MarkdownConfig`` or keyword arguments
    validated by ``build_config``::

        app = Starlette(middleware=[
            Middleware(MarkdownMiddleware, root="docs", base_url="/docs", cache=True),
        ])
    """

    def __init__(
        self,
        app: ASGIApp,
        config: MarkdownConfig | None = None,
        **options: Any,
    ) -> None:
        self.app = app
        self.config = config if config is not None else build_config(**options)
        self.state = build_state(self.config)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "GET":
            await self.app(scope, receive, send)
            return

        request_path: str = scope["path"]
        file_path = resolve_document_path(request_path, self.config)
        if file_path is None:
            log.debug("request_declined", path=request_path, reason="outside_base_url")
            await self.app(scope, receive, send)
            return

        html = await get_page(file_path, self.state)
        if html is None:
            log.debug("request_declined", path=request_path, reason="not_found")
            await self.app(scope, receive, send)
            return

        await HTMLResponse(html)(scope, receive, send)
