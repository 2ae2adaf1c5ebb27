"""Standalone server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Build a Starlette app with MarkdownMiddleware in front of the 404 router
- Start uvicorn
"""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mdpages import __version__
from mdpages.config import Settings
from mdpages.errors import ConfigurationError
from mdpages.middleware import MarkdownMiddleware

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def build_app(settings: Settings) -> Starlette:
    """Return a Starlette app serving ``settings.pages`` as HTML.

    The app has no routes of its own: anything the middleware declines gets
    Starlette's plain ``404 Not Found``.
    """
    config = settings.pages.to_config()
    return Starlette(middleware=[Middleware(MarkdownMiddleware, config=config)])


def run_http_server(settings: Settings) -> None:
    """Start the documentation server with uvicorn."""
    _setup_logging(settings)
    app = build_app(settings)

    log.info(
        "server_starting",
        version=__version__,
        root=settings.pages.root,
        base_url=settings.pages.base_url,
        cache=settings.pages.cache,
    )

    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()
    try:
        run_http_server(settings)
    except ConfigurationError as exc:
        log.error("server_config_invalid", **exc.to_dict()["error"])
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
