"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_logging_config,
    _build_theme_config,
    _merge_theme,
    _optional_str,
    _resolve_source_path,
)
from .models import DocumentConfig, SiteConfig, SiteConfigError, ThemeConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing specification documents.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/specdoc.yaml``). Relative ``source_path`` entries are
        resolved against the directory containing this file.

    Returns
    -------
    SiteConfig
        Parsed site configuration, including document definitions, the
        default theme, and logging preferences.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required sections or fields are missing or invalid in the
        configuration (for example, no documents are defined).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from specdoc.config import load_site_config
    >>> config = load_site_config(Path("config/specdoc.yaml"))  # doctest: +SKIP
    >>> sorted(config.documents.keys())[:1]  # doctest: +SKIP
    ['checkout-flow']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}

    default_theme = _build_theme_config(defaults.get("theme", {}) or {})
    document_defaults = _DocumentDefaults(
        theme=default_theme,
        output_dir=Path(defaults.get("output_dir", "public")),
        filename_prefix=defaults.get("filename_prefix", "spec-"),
        pygments_style=defaults.get("pygments_style", "monokai"),
        page_title_suffix=defaults.get("page_title_suffix", "Specification"),
        footer_note=defaults.get("footer_note", ""),
        inject_anchors=bool(defaults.get("inject_anchors", True)),
        base_dir=path.resolve().parent,
    )

    documents_raw = raw.get("documents") or {}
    if not documents_raw:
        msg = "No documents defined in site configuration."
        raise SiteConfigError(msg)
    if not isinstance(documents_raw, dict):
        msg = "The 'documents' section must map document keys to settings."
        raise SiteConfigError(msg)

    documents: dict[str, DocumentConfig] = {}
    for key, payload in documents_raw.items():
        match payload:
            case dict():
                documents[key] = _build_document_config(
                    key=key,
                    payload=payload,
                    defaults=document_defaults,
                )
            case _:
                msg = f"Document '{key}' must be a mapping of settings."
                raise SiteConfigError(msg)

    return SiteConfig(
        documents=documents,
        default_document=defaults.get("default_document"),
        theme=default_theme,
        logging=_build_logging_config(raw.get("logging")),
    )


@dc.dataclass(slots=True)
class _DocumentDefaults:
    """Internal container for document default configuration values."""

    theme: ThemeConfig
    output_dir: Path
    filename_prefix: str
    pygments_style: str
    page_title_suffix: str
    footer_note: str
    inject_anchors: bool
    base_dir: Path


def _build_document_config(
    *,
    key: str,
    payload: typ.Mapping[str, typ.Any],
    defaults: _DocumentDefaults,
) -> DocumentConfig:
    """Build a DocumentConfig for a single entry using defaults and overrides."""
    source_path = _resolve_source_path(payload.get("source_path"), defaults.base_dir)
    source_url = _optional_str(payload.get("source_url"))
    if source_path is None and source_url is None:
        msg = f"Document '{key}' is missing 'source_path' or 'source_url'."
        raise SiteConfigError(msg)

    label = payload.get("label") or key.replace("-", " ").title()
    return DocumentConfig(
        key=key,
        label=label,
        source_path=source_path,
        source_url=source_url,
        description=payload.get("description", "") or "",
        page_title_suffix=payload.get("page_title_suffix", defaults.page_title_suffix),
        filename_prefix=payload.get("filename_prefix", defaults.filename_prefix),
        output_dir=Path(payload.get("output_dir", defaults.output_dir)),
        pygments_style=payload.get("pygments_style", defaults.pygments_style),
        footer_note=payload.get("footer_note", defaults.footer_note),
        inject_anchors=bool(payload.get("inject_anchors", defaults.inject_anchors)),
        theme=_merge_theme(defaults.theme, payload.get("theme")),
    )


__all__ = ["load_site_config"]
