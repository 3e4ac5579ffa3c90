r"""Structure AI-generated Markdown specifications into navigable documents.

This package splits a flat Markdown specification into a nested table of
contents and addressable sections, and renders the result as themed HTML via
the ``specdoc`` console script.

Exports
-------
- ``parse_markdown_document``: Parse Markdown into toc, sections and headings.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from specdoc import parse_markdown_document
>>> doc = parse_markdown_document("# Overview\nText")
>>> doc.sections[0].id
'overview'
"""

from __future__ import annotations

from .cli import app, main
from .markdown_parser import parse_markdown_document

__all__ = ["app", "main", "parse_markdown_document"]
