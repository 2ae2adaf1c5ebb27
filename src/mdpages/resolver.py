"""Request path resolution.

Pure business logic: receives a request path and MarkdownConfig, returns the
Markdown document path or ``None`` when the request is not ours.
No knowledge of ASGI, the cache or the filesystem contents.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mdpages.config import MarkdownConfig

DOCUMENT_EXTENSION = ".md"


def resolve_document_path(request_path: str, config: MarkdownConfig) -> Path | None:
    """Map a request path to a document under ``config.root``.

    Steps (order matters):
      1. The base URL, with or without its trailing slash, becomes
         ``base_url + index_name``.
      2. Any other folder-style path (trailing slash) gets ``index_name``
         appended.  ``/docs/index`` stays as is; ``/docs/index/`` becomes
         ``/docs/index/index``.
      3. Paths outside ``base_url`` are declined.
      4. The remainder after ``base_url`` is joined onto ``root`` with the
         ``.md`` extension.

    Returns ``None`` when the request is outside the mount point, contains a
    NUL character, or when the normalised path would land outside ``root``.
    """
    base_url = config.base_url
    pathname = request_path

    if pathname + "/" == base_url or pathname == base_url:
        pathname = base_url + config.index_name

    if pathname.endswith("/"):
        pathname = pathname + config.index_name

    if not pathname.startswith(base_url):
        return None

    # ASGI paths arrive percent-decoded; "%00" cannot name a file
    if "\x00" in pathname:
        return None

    relative = pathname[len(base_url) :] + DOCUMENT_EXTENSION
    # Empty segments from "//" are dropped by joinpath; ".." is collapsed here
    candidate = Path(os.path.normpath(config.root.joinpath(*relative.split("/"))))
    if not candidate.is_relative_to(config.root):
        return None
    return candidate
