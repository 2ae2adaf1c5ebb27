"""Shared test fixtures for the mdpages test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mdpages.config import MarkdownConfig, build_config

if TYPE_CHECKING:
    from pathlib import Path

_LAYOUT = "<html><head><title>{TITLE}</title></head><body>{BODY}</body></html>"


@pytest.fixture()
def docs_dir(tmp_path: Path) -> Path:
    """A small documentation tree mirroring a typical mdpages site.

    docs/
      layout.html
      readme.md            index document (index_name="readme")
      plain.md             first line without heading marker
      replace.md           "$&" in title and body
      replace-alone.md     lone "$" in body
      f/readme.md          folder index
    """
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "layout.html").write_text(_LAYOUT, encoding="utf-8")
    (docs / "readme.md").write_text(
        "# mdpages\n\nServe Markdown documents as HTML pages.\n", encoding="utf-8"
    )
    (docs / "plain.md").write_text("Plain title\n\nNo heading marker here.\n", encoding="utf-8")
    (docs / "replace.md").write_text("# $&test\n\n$&test\n", encoding="utf-8")
    (docs / "replace-alone.md").write_text("# Pricing\n\nIt costs $5.\n", encoding="utf-8")

    folder = docs / "f"
    folder.mkdir()
    (folder / "readme.md").write_text("# Folder\n\nInside a folder.\n", encoding="utf-8")
    return docs


@pytest.fixture()
def config(docs_dir: Path) -> MarkdownConfig:
    """Config mounted at /docs with readme as the index document."""
    return build_config(root=str(docs_dir), base_url="/docs", index_name="readme")
