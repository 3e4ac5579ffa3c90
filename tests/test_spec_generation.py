"""End-to-end tests for specdoc HTML page generation.

This module exercises the pipeline driven by
``specdoc.generator.SpecPageGenerator``. A representative specification
fixture is rendered with a minimal ``DocumentConfig`` to verify that the
generated ``spec-*.html`` page:

* Renders a nested sidebar outline whose anchors match the heading slugs.
* Emits one collapsible block per section, with only the first one open,
  and keeps level-2 sub-titles inside their enclosing section.
* Gives nested headings inside a section body the same ids as their
  outline entries.
* Preserves fenced code blocks as ``codehilite`` blocks with the correct
  ``data-language`` attribute.
* Writes the ``SPEC_META_TEMPLATE`` JSON file describing the page.
* Falls back to a raw-text view or an empty state when no section exists.

The fixtures are:

* ``sample_markdown``: the specification text under test.
* ``document_config``: a ``DocumentConfig`` rooted in a per-test directory.
* ``markdown_response``: stubs ``requests.Session`` so remote content is
  served from memory with a ``Last-Modified`` header.
* ``generated_page``: runs the generator and parses the page with
  ``BeautifulSoup``.

Run ``pytest tests/test_spec_generation.py`` to execute only this module.
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from specdoc._constants import SPEC_META_TEMPLATE
from specdoc.config import DocumentConfig, ThemeConfig
from specdoc.generator import SpecPageGenerator


@pytest.fixture
def sample_markdown() -> str:
    """Return a specification with pre-heading text, sub-titles and code."""
    return (
        "Generated from design review.\n"
        "\n"
        "# Checkout Flow\n"
        "## Version 2.0\n"
        "Intro paragraph with `checkout` code.\n"
        "\n"
        "### 1. Overview\n"
        "Overview text.\n"
        "\n"
        "#### 1.1 Goals\n"
        "- fast\n"
        "- safe\n"
        "\n"
        "### 2. Payment\n"
        "```json\n"
        '{"provider": "card"}\n'
        "```\n"
    )


@pytest.fixture
def document_config(tmp_path: Path) -> DocumentConfig:
    """Build a minimal document configuration rooted in a temp directory."""
    return DocumentConfig(
        key="checkout",
        label="Checkout",
        source_path=None,
        source_url="https://example.invalid/checkout.md",
        description="Fixture description",
        page_title_suffix="Specification",
        filename_prefix="spec-",
        output_dir=tmp_path / "public",
        pygments_style="monokai",
        footer_note="Fixture footer",
        inject_anchors=True,
        theme=ThemeConfig(
            hero_eyebrow="Fixture",
            hero_tagline="Fixture tagline",
            doc_label="Spec",
            site_name="Acme",
        ),
    )


@pytest.fixture
def markdown_response(
    sample_markdown: str, monkeypatch: pytest.MonkeyPatch
) -> dict[str, typ.Any]:
    state: dict[str, typ.Any] = {
        "body": sample_markdown,
        "last_modified": "Tue, 11 Nov 2025 00:00:00 GMT",
        "calls": [],
    }

    class _Response:
        def __init__(self, body: str, headers: dict[str, str]) -> None:
            self.text = body
            self.headers = headers

        def raise_for_status(self) -> None:
            return None

    class _Session:
        def mount(self, *_args: typ.Any, **_kwargs: typ.Any) -> None:
            return None

        def get(self, url: str, timeout: int = 30) -> _Response:  # noqa: ARG002
            state["calls"].append(url)
            return _Response(state["body"], {"Last-Modified": state["last_modified"]})

        def close(self) -> None:
            return None

    monkeypatch.setattr(
        "specdoc.generator.page_generator.requests.Session", lambda: _Session()
    )
    return state


@pytest.fixture
def generated_page(
    document_config: DocumentConfig,
    markdown_response: dict[str, typ.Any],  # noqa: ARG001
) -> BeautifulSoup:
    """Generate the HTML page from the sample markdown and parse it."""
    path = SpecPageGenerator(document_config).run()
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_page_written_to_configured_output(
    document_config: DocumentConfig, markdown_response: dict[str, typ.Any]
) -> None:
    path = SpecPageGenerator(document_config).run()
    assert path == document_config.output_dir / "spec-checkout.html"
    assert path.exists()
    assert markdown_response["calls"] == ["https://example.invalid/checkout.md"]


def test_page_title_and_metadata(generated_page: BeautifulSoup) -> None:
    assert generated_page.title is not None
    assert generated_page.title.get_text() == "Acme | Checkout | Specification"
    updated = generated_page.select_one("[data-test='spec-updated']")
    assert updated is not None, "expected an updated timestamp element"
    assert str(updated.get("datetime")).startswith("2025-11-11"), (
        "expected the Last-Modified header to drive the updated timestamp"
    )


def test_sidebar_outline_matches_heading_slugs(generated_page: BeautifulSoup) -> None:
    links = generated_page.select("nav.spec-toc a")
    assert [link.get("href") for link in links] == [
        "#checkout-flow",
        "#version-20",
        "#1-overview",
        "#11-goals",
        "#2-payment",
    ]
    top_items = generated_page.select("nav.spec-toc > ul > li")
    assert len(top_items) == 1, "expected a single root entry in the outline"


def test_sections_rendered_as_collapsible_blocks(generated_page: BeautifulSoup) -> None:
    blocks = generated_page.select("details.spec-section")
    assert [block.get("id") for block in blocks] == [
        "checkout-flow",
        "1-overview",
        "11-goals",
        "2-payment",
    ]
    assert [block.has_attr("open") for block in blocks] == [True, False, False, False]
    titles = [block.select_one("summary").get_text(strip=True) for block in blocks]
    assert titles == ["Checkout Flow", "1. Overview", "1.1 Goals", "2. Payment"]


def test_subtitle_stays_inside_first_section(generated_page: BeautifulSoup) -> None:
    first = generated_page.select_one("details#checkout-flow .spec-section__body")
    assert first is not None
    subtitle = first.find("h2", id="version-20")
    assert subtitle is not None, "expected the H2 to render inside the first section"
    assert subtitle.get_text(strip=True) == "Version 2.0"
    assert "Generated from design review." in first.get_text()


def test_code_block_keeps_language(generated_page: BeautifulSoup) -> None:
    block = generated_page.select_one("details#2-payment div.codehilite")
    assert block is not None, "expected a highlighted code block in the payment section"
    assert block.get("data-language") == "json"
    assert "provider" in block.get_text()


def test_metadata_file_written(
    document_config: DocumentConfig, markdown_response: dict[str, typ.Any]
) -> None:
    SpecPageGenerator(document_config).run()
    meta_path = document_config.output_dir / SPEC_META_TEMPLATE.format(key="checkout")
    metadata = json.loads(meta_path.read_text(encoding="utf-8"))
    assert metadata["file"] == "spec-checkout.html"
    assert metadata["sections"] == [
        "checkout-flow",
        "1-overview",
        "11-goals",
        "2-payment",
    ]
    assert metadata["headings"] == 5


def test_local_source_path_is_preferred(
    tmp_path: Path,
    document_config: DocumentConfig,
    markdown_response: dict[str, typ.Any],
) -> None:
    source = tmp_path / "local.md"
    source.write_text("# Local Spec\nFrom disk.\n", encoding="utf-8")
    config = dc.replace(document_config, source_path=source)
    path = SpecPageGenerator(config).run()
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    assert [block.get("id") for block in soup.select("details.spec-section")] == [
        "local-spec"
    ]
    assert markdown_response["calls"] == []


def test_missing_local_source_raises(
    tmp_path: Path, document_config: DocumentConfig
) -> None:
    config = dc.replace(document_config, source_path=tmp_path / "absent.md")
    with pytest.raises(FileNotFoundError, match="absent.md"):
        SpecPageGenerator(config).run()


def test_output_dir_override(
    tmp_path: Path,
    document_config: DocumentConfig,
    markdown_response: dict[str, typ.Any],
) -> None:
    override = tmp_path / "elsewhere"
    path = SpecPageGenerator(document_config, output_dir=override).run()
    assert path.parent == override


def test_heading_free_markdown_shows_raw_text(
    document_config: DocumentConfig, markdown_response: dict[str, typ.Any]
) -> None:
    markdown_response["body"] = "Plain text without any headings."
    path = SpecPageGenerator(document_config).run()
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    raw = soup.select_one("[data-test='spec-raw'] pre")
    assert raw is not None, "expected the raw specification fallback"
    assert raw.get_text() == "Plain text without any headings."
    assert soup.select("details.spec-section") == []
    assert soup.select_one("nav.spec-toc") is None


def test_blank_markdown_shows_empty_state(
    document_config: DocumentConfig, markdown_response: dict[str, typ.Any]
) -> None:
    markdown_response["body"] = "\n\n"
    path = SpecPageGenerator(document_config).run()
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    assert soup.select_one("[data-test='spec-empty']") is not None


def test_crlf_remote_source_keeps_outline_anchors(
    document_config: DocumentConfig,
    sample_markdown: str,
    markdown_response: dict[str, typ.Any],
) -> None:
    """Windows line endings from the server do not detach heading ids."""
    markdown_response["body"] = sample_markdown.replace("\n", "\r\n")
    path = SpecPageGenerator(document_config).run()
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    hrefs = [str(link.get("href")) for link in soup.select("nav.spec-toc a")]
    assert hrefs[:2] == ["#checkout-flow", "#version-20"]
    missing = [href for href in hrefs if soup.find(id=href[1:]) is None]
    assert not missing, f"expected anchors for every outline link, missing {missing!r}"
    assert "{#" not in soup.get_text()
