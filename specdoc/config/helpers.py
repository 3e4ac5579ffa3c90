"""Utility helpers shared by the specdoc configuration loader."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from .models import LoggingConfig, SiteConfigError, ThemeConfig

LOG_FORMATS = ("console", "json")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_source_path(value: object | None, base_dir: Path) -> Path | None:
    """Resolve a configured source path relative to the config file directory."""
    text = _optional_str(value)
    if text is None:
        return None
    path = Path(text).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def _merge_theme(
    base: ThemeConfig, override: typ.Mapping[str, typ.Any] | None
) -> ThemeConfig:
    """Merge an override theme mapping into the base ThemeConfig."""
    if not override:
        return base
    return ThemeConfig(
        hero_eyebrow=override.get("hero_eyebrow", base.hero_eyebrow),
        hero_tagline=override.get("hero_tagline", base.hero_tagline),
        doc_label=override.get("doc_label", base.doc_label),
        site_name=override.get("site_name", base.site_name),
    )


def _build_theme_config(payload: typ.Mapping[str, typ.Any]) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    return _merge_theme(ThemeConfig(), payload)


def _build_logging_config(payload: typ.Mapping[str, typ.Any] | None) -> LoggingConfig:
    """Build and validate the logging section of the site configuration."""
    base = LoggingConfig()
    if not payload:
        return base
    level = str(payload.get("level", base.level)).upper()
    if level not in logging.getLevelNamesMapping():
        msg = f"Unknown logging level '{level}'."
        raise SiteConfigError(msg)
    fmt = str(payload.get("format", base.format)).lower()
    if fmt not in LOG_FORMATS:
        expected = ", ".join(LOG_FORMATS)
        msg = f"Unknown logging format '{fmt}'; expected one of {expected}."
        raise SiteConfigError(msg)
    return LoggingConfig(level=level, format=fmt)


__all__ = [
    "LOG_FORMATS",
    "_build_logging_config",
    "_build_theme_config",
    "_merge_theme",
    "_optional_str",
    "_resolve_source_path",
]
