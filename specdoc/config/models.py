"""Typed dataclasses describing specdoc site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ThemeConfig:
    """Visual theming applied to rendered specification pages."""

    hero_eyebrow: str = "specdoc"
    hero_tagline: str = "Generated specification"
    doc_label: str = "Specification"
    site_name: str = "specdoc"


@dc.dataclass(slots=True)
class LoggingConfig:
    """Structured logging preferences applied by the CLI at startup."""

    level: str = "INFO"
    format: str = "console"


@dc.dataclass(slots=True)
class DocumentConfig:
    """A fully resolved specification document sourced from YAML config."""

    key: str
    label: str
    source_path: Path | None
    source_url: str | None
    description: str
    page_title_suffix: str
    filename_prefix: str
    output_dir: Path
    pygments_style: str
    footer_note: str
    inject_anchors: bool
    theme: ThemeConfig

    @property
    def output_filename(self) -> str:
        """Return the HTML filename written for this document."""
        return f"{self.filename_prefix}{self.key}.html"


@dc.dataclass(slots=True)
class SiteConfig:
    """Collection of document configs alongside shared defaults."""

    documents: dict[str, DocumentConfig]
    default_document: str | None = None
    theme: ThemeConfig | None = None
    logging: LoggingConfig = dc.field(default_factory=LoggingConfig)

    def get_document(self, key: str | None) -> DocumentConfig:
        """Return the requested document or fall back to the configured default."""
        if key is None:
            return self._get_default_document()
        try:
            return self.documents[key]
        except KeyError as exc:
            available = ", ".join(sorted(self.documents))
            msg = f"Unknown document '{key}'. Known documents: {available}"
            raise KeyError(msg) from exc

    def _get_default_document(self) -> DocumentConfig:
        """Return the configured default document or the first defined one."""
        if self.default_document and self.default_document in self.documents:
            return self.documents[self.default_document]
        if not self.documents:  # pragma: no cover - configuration error
            msg = "No documents configured in site file."
            raise SiteConfigError(msg)
        first_key = next(iter(self.documents))
        return self.documents[first_key]


__all__ = [
    "DocumentConfig",
    "LoggingConfig",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
]
