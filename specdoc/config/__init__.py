"""Load and validate site configuration YAML for specdoc builds.

This subpackage parses the project's ``specdoc.yaml`` file, merges global
defaults with per-document overrides, resolves local source paths, and
produces typed dataclasses (:class:`SiteConfig`, :class:`DocumentConfig`,
etc.) that the page generator and CLI consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from specdoc.config import load_site_config
>>> site = load_site_config(Path("config/specdoc.yaml"))  # doctest: +SKIP
>>> document = site.get_document("checkout-flow")  # doctest: +SKIP
>>> document.output_filename  # doctest: +SKIP
'spec-checkout-flow.html'
"""

from .loader import load_site_config
from .models import (
    DocumentConfig,
    LoggingConfig,
    SiteConfig,
    SiteConfigError,
    ThemeConfig,
)

__all__ = [
    "DocumentConfig",
    "LoggingConfig",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
    "load_site_config",
]
