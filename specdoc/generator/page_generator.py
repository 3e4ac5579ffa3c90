"""High-level orchestration for specification page generation.

This module loads a generated specification (from disk or over HTTP), runs it
through :func:`~specdoc.markdown_parser.parse_markdown_document`, and renders
a single themed HTML page with a sidebar outline and one collapsible block per
section. It exposes :class:`SpecPageGenerator`, which consumes a
:class:`~specdoc.config.DocumentConfig` and persists both the HTML page and a
small metadata file describing what was written.

Example
-------
>>> from pathlib import Path
>>> from specdoc.config import load_site_config
>>> from specdoc.generator import SpecPageGenerator
>>> config = load_site_config(Path("config/specdoc.yaml"))  # doctest: +SKIP
>>> document = config.get_document("checkout-flow")  # doctest: +SKIP
>>> SpecPageGenerator(document).run()  # doctest: +SKIP
PosixPath('public/spec-checkout-flow.html')
"""

from __future__ import annotations

import datetime as dt
import json
import typing as typ
from email.utils import parsedate_to_datetime
from pathlib import Path

import requests
import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from specdoc._constants import SPEC_META_TEMPLATE
from specdoc.generator.models import SectionModel, TocEntryModel
from specdoc.generator.renderer import HtmlContentRenderer
from specdoc.markdown_parser import ParsedDocument, parse_markdown_document

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from specdoc.config import DocumentConfig
    from specdoc.toc import TOCItem

log = structlog.get_logger()


class SpecPageGenerator:
    """Load specification Markdown and emit one themed, navigable HTML page."""

    def __init__(
        self,
        document: DocumentConfig,
        *,
        templates_dir: Path | None = None,
        source_path: Path | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        document : DocumentConfig
            Document configuration describing the source, theming, and output.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        source_path : Path, optional
            Local Markdown file overriding the configured source.
        output_dir : Path, optional
            Override for the HTML output directory.
        """
        self.document = document
        self.source_path = source_path or document.source_path
        self.output_dir = output_dir or document.output_dir
        self.templates_dir = (
            templates_dir or Path(__file__).resolve().parents[1] / "templates"
        )
        self.renderer = HtmlContentRenderer(
            document.pygments_style, inject_anchors=document.inject_anchors
        )
        self.doc_updated_at: dt.datetime | None = None
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("spec_page.jinja")
        self._log = log.bind(document=document.key)

    def run(self) -> Path:
        """Render the configured specification into an HTML file on disk.

        Returns
        -------
        Path
            Path to the generated HTML document.

        Raises
        ------
        FileNotFoundError
            If a local ``source_path`` is configured but does not exist.
        requests.HTTPError
            If the remote source responds with an error after retries.

        Notes
        -----
        A specification without any section still renders: the page shows
        the raw text, or an empty-state notice when the text is blank.
        """
        markdown_source = self._load_markdown()
        parsed = parse_markdown_document(markdown_source)
        self._log.info(
            "document_parsed",
            headings=len(parsed.headings),
            sections=len(parsed.sections),
        )

        generated_at = dt.datetime.now(dt.UTC)
        context = {
            "document": self.document,
            "theme": self.document.theme,
            "html_title": self._format_page_title(),
            "toc": self._build_toc_entries(parsed.toc),
            "sections": self._build_section_models(parsed),
            "raw_markdown": markdown_source,
            "generated_at": generated_at,
            "doc_updated_at": self.doc_updated_at or generated_at,
            "pygments_css": self.renderer.stylesheet,
            "footer_note": self.document.footer_note,
        }
        html = self.template.render(**context)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / self.document.output_filename
        output_path.write_text(html, encoding="utf-8")
        self._write_metadata(output_path.name, parsed, generated_at)
        self._log.info("spec_page_written", path=str(output_path))
        return output_path

    def _load_markdown(self) -> str:
        """Return the Markdown source from disk, falling back to the source URL."""
        if self.source_path is not None:
            if not self.source_path.exists():
                msg = f"Specification source '{self.source_path}' not found."
                raise FileNotFoundError(msg)
            modified = self.source_path.stat().st_mtime
            self.doc_updated_at = dt.datetime.fromtimestamp(modified, tz=dt.UTC)
            return self.source_path.read_text(encoding="utf-8")
        return self._fetch_markdown()

    def _fetch_markdown(self) -> str:
        """Download Markdown from the configured URL, updating doc timestamps."""
        session = requests.Session()
        retry = Retry(
            total=5,
            read=5,
            connect=3,
            backoff_factor=0.5,
            status_forcelist=(500, 502, 503, 504),
            allowed_methods=("GET", "HEAD"),
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        try:
            self._log.debug("fetching_markdown", url=self.document.source_url)
            resp = session.get(self.document.source_url, timeout=30)
            resp.raise_for_status()
            self.doc_updated_at = self._extract_timestamp(
                resp.headers.get("Last-Modified")
            )
            return resp.text.replace("\r\n", "\n")
        finally:
            session.close()

    @staticmethod
    def _extract_timestamp(header_value: str | None) -> dt.datetime | None:
        """Parse an HTTP Last-Modified header into a timezone-aware UTC datetime."""
        if not header_value:
            return None
        try:
            parsed = parsedate_to_datetime(header_value)
        except (TypeError, ValueError):
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=dt.UTC)
        return parsed.astimezone(dt.UTC)

    def _build_toc_entries(self, toc: cabc.Iterable[TOCItem]) -> list[TocEntryModel]:
        """Convert the TOC forest into sidebar entries, preserving nesting."""
        return [
            TocEntryModel(
                label=item.title,
                anchor=item.id,
                level=item.level,
                children=self._build_toc_entries(item.children),
            )
            for item in toc
        ]

    def _build_section_models(self, parsed: ParsedDocument) -> list[SectionModel]:
        """Render every section body and wrap it for the template."""
        return [
            SectionModel(
                title=section.title,
                anchor=section.id,
                level=section.level,
                order=order,
                html=self.renderer.section_html(section),
                original_markdown=section.original_markdown,
                is_open=order == 1,
            )
            for order, section in enumerate(parsed.sections, start=1)
        ]

    def _format_page_title(self) -> str:
        """Compose the HTML title using site name, document label, and suffix."""
        site_name = self.document.theme.site_name
        suffix = self.document.page_title_suffix
        return f"{site_name} | {self.document.label} | {suffix}"

    def _metadata_path(self) -> Path:
        """Return the path to the metadata JSON file for this document."""
        return self.output_dir / SPEC_META_TEMPLATE.format(key=self.document.key)

    def _write_metadata(
        self, filename: str, parsed: ParsedDocument, generated_at: dt.datetime
    ) -> None:
        """Persist the metadata JSON describing the rendered page."""
        metadata = {
            "file": filename,
            "sections": [section.id for section in parsed.sections],
            "headings": len(parsed.headings),
            "generated_at": generated_at.isoformat(),
        }
        path = self._metadata_path()
        try:
            path.write_text(json.dumps(metadata), encoding="utf-8")
        except OSError:
            self._log.warning("metadata_write_failed", path=str(path), exc_info=True)


__all__ = ["SpecPageGenerator"]
