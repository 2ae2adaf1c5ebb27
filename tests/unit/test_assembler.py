"""Unit tests for page assembly, layout/document loading and memoization."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mdpages.assembler import get_page, substitute
from mdpages.config import build_config
from mdpages.loader import load_content, load_layout
from mdpages.state import build_state

if TYPE_CHECKING:
    from pathlib import Path


class CountingRenderer:
    """Renderer that embeds its call count in the output."""

    def __init__(self) -> None:
        self.calls = 0

    def render(self, source: str) -> str:
        self.calls += 1
        return f"<main data-call={self.calls}>{source.splitlines()[-1]}</main>"


# ---------------------------------------------------------------------------
# substitute
# ---------------------------------------------------------------------------


class TestSubstitute:
    def test_replaces_holder(self) -> None:
        assert substitute("<h1>{TITLE}</h1>", "{TITLE}", "Hi") == "<h1>Hi</h1>"

    def test_only_first_occurrence(self) -> None:
        assert substitute("{TITLE}|{TITLE}", "{TITLE}", "Hi") == "Hi|{TITLE}"

    def test_missing_holder_leaves_template(self) -> None:
        assert substitute("<p>static</p>", "{TITLE}", "Hi") == "<p>static</p>"

    @pytest.mark.parametrize("value", ["$&test", "$", "$$", "$1", "\\1", "\\g<0>"])
    def test_value_inserted_literally(self, value: str) -> None:
        assert substitute("[{BODY}]", "{BODY}", value) == f"[{value}]"


# ---------------------------------------------------------------------------
# loader
# ---------------------------------------------------------------------------


class TestLoader:
    async def test_load_content(self, docs_dir: Path) -> None:
        state = build_state(build_config(root=str(docs_dir)))
        content = await load_content(docs_dir / "readme.md", state)
        assert content.title == "mdpages"
        assert content.body.startswith("<h1>mdpages</h1>")
        assert "<p>Serve Markdown documents as HTML pages.</p>" in content.body

    async def test_load_content_missing_file(self, docs_dir: Path) -> None:
        state = build_state(build_config(root=str(docs_dir)))
        with pytest.raises(FileNotFoundError):
            await load_content(docs_dir / "missing.md", state)

    async def test_load_content_other_io_error_propagates(self, docs_dir: Path) -> None:
        (docs_dir / "folder.md").mkdir()
        state = build_state(build_config(root=str(docs_dir)))
        with pytest.raises(IsADirectoryError):
            await load_content(docs_dir / "folder.md", state)

    async def test_layout_read_once_when_cached(self, docs_dir: Path) -> None:
        state = build_state(build_config(root=str(docs_dir), cache=True))
        first = await load_layout(state)
        (docs_dir / "layout.html").write_text("changed", encoding="utf-8")
        assert await load_layout(state) == first

    async def test_layout_reread_when_not_cached(self, docs_dir: Path) -> None:
        state = build_state(build_config(root=str(docs_dir)))
        await load_layout(state)
        (docs_dir / "layout.html").write_text("changed", encoding="utf-8")
        assert await load_layout(state) == "changed"


# ---------------------------------------------------------------------------
# get_page
# ---------------------------------------------------------------------------


class TestGetPage:
    async def test_assembles_title_and_body(self, docs_dir: Path) -> None:
        (docs_dir / "layout.html").write_text("<title>{TITLE}</title>{BODY}", encoding="utf-8")
        state = build_state(build_config(root=str(docs_dir), render=lambda s: "<p>x</p>"))
        assert await get_page(docs_dir / "readme.md", state) == "<title>mdpages</title><p>x</p>"

    async def test_missing_document_returns_none(self, docs_dir: Path) -> None:
        state = build_state(build_config(root=str(docs_dir)))
        assert await get_page(docs_dir / "missing.md", state) is None

    async def test_missing_layout_returns_none(self, docs_dir: Path) -> None:
        state = build_state(build_config(root=str(docs_dir), layout=str(docs_dir / "nope.html")))
        assert await get_page(docs_dir / "readme.md", state) is None

    async def test_dollar_sequences_kept_verbatim(self, docs_dir: Path) -> None:
        (docs_dir / "layout.html").write_text("{TITLE}|{BODY}", encoding="utf-8")
        (docs_dir / "money.md").write_text("# $&test $ $$\n$&body", encoding="utf-8")
        state = build_state(build_config(root=str(docs_dir), render=lambda s: s))
        html = await get_page(docs_dir / "money.md", state)
        assert html == "$&test $ $$|# $&test $ $$\n$&body"

    async def test_title_substituted_before_body(self, docs_dir: Path) -> None:
        (docs_dir / "layout.html").write_text("{TITLE}{BODY}", encoding="utf-8")
        (docs_dir / "tricky.md").write_text("# see {BODY}\n", encoding="utf-8")
        state = build_state(build_config(root=str(docs_dir), render=lambda s: "B"))
        # The body holder now inside the title is the first occurrence
        assert await get_page(docs_dir / "tricky.md", state) == "see B{BODY}"

    async def test_renderer_errors_propagate(self, docs_dir: Path) -> None:
        def broken(source: str) -> str:
            raise ValueError("bad markdown")

        state = build_state(build_config(root=str(docs_dir), render=broken))
        with pytest.raises(ValueError, match="bad markdown"):
            await get_page(docs_dir / "readme.md", state)


class TestGetPageCaching:
    async def test_cached_page_not_rerendered(self, docs_dir: Path) -> None:
        renderer = CountingRenderer()
        state = build_state(build_config(root=str(docs_dir), render=renderer, cache=True))

        first = await get_page(docs_dir / "readme.md", state)
        second = await get_page(docs_dir / "readme.md", state)

        assert first == second
        assert renderer.calls == 1

    async def test_uncached_page_rerendered(self, docs_dir: Path) -> None:
        renderer = CountingRenderer()
        state = build_state(build_config(root=str(docs_dir), render=renderer))

        first = await get_page(docs_dir / "readme.md", state)
        second = await get_page(docs_dir / "readme.md", state)

        assert first != second
        assert renderer.calls == 2
        assert state.cache is None

    async def test_missing_document_not_cached(self, docs_dir: Path) -> None:
        state = build_state(build_config(root=str(docs_dir), cache=True))
        assert await get_page(docs_dir / "later.md", state) is None

        (docs_dir / "later.md").write_text("# Later\n", encoding="utf-8")
        html = await get_page(docs_dir / "later.md", state)
        assert html is not None
        assert "<title>Later</title>" in html

    async def test_pages_keyed_by_path(self, docs_dir: Path) -> None:
        state = build_state(build_config(root=str(docs_dir), cache=True))
        readme = await get_page(docs_dir / "readme.md", state)
        plain = await get_page(docs_dir / "plain.md", state)
        assert readme != plain
        assert state.cache is not None
        assert state.cache.get_page(str(docs_dir / "plain.md")) == plain


class TestGetPageUndecodableBytes:
    async def test_invalid_utf8_document_replaced(self, docs_dir: Path) -> None:
        (docs_dir / "latin.md").write_bytes(b"# Caf\xe9\nbody")
        state = build_state(build_config(root=str(docs_dir), render=lambda s: s))
        html = await get_page(docs_dir / "latin.md", state)
        assert html is not None
        assert "<title>Caf�</title>" in html

    async def test_invalid_utf8_layout_replaced(self, docs_dir: Path) -> None:
        (docs_dir / "layout.html").write_bytes(b"\xff{TITLE}|{BODY}")
        state = build_state(build_config(root=str(docs_dir), render=lambda s: "B"))
        assert await get_page(docs_dir / "readme.md", state) == "�mdpages|B"

    async def test_path_through_regular_file_returns_none(self, docs_dir: Path) -> None:
        state = build_state(build_config(root=str(docs_dir)))
        assert await get_page(docs_dir / "layout.html" / "x.md", state) is None
