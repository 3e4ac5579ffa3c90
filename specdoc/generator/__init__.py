"""Utilities for rendering and generating specdoc specification pages."""

from .models import SectionModel, TocEntryModel
from .page_generator import SpecPageGenerator
from .renderer import HtmlContentRenderer

__all__ = [
    "HtmlContentRenderer",
    "SectionModel",
    "SpecPageGenerator",
    "TocEntryModel",
]
