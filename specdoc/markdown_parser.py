r"""Structure flat Markdown specifications into headings and sections.

This module is the core of specdoc. It scans a Markdown document line by line,
derives a stable slug for every heading, and partitions the document into
addressable sections that the renderer and CLI consume. Heading level 2 is a
sub-title of the enclosing section rather than a section boundary, so a
``## Overview`` line stays inside the ``# Product`` section above it.

Every function here is pure: no I/O, no shared state, and no exceptions for
any string input. Heading-free or empty input degenerates to empty results.

Example
-------
>>> from specdoc.markdown_parser import parse_markdown_document
>>> doc = parse_markdown_document("# Intro\nBody\n## Aside\nMore\n### Details\nText")
>>> [section.title for section in doc.sections]
['Intro', 'Details']
>>> [item.title for item in doc.toc]
['Intro']
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ._constants import ANCHOR_TEMPLATE
from .toc import TOCItem, build_toc

if typ.TYPE_CHECKING:
    import collections.abc as cabc

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(\S[^\r]*)\r?$")
_DISALLOWED_ID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")

SUBTITLE_LEVEL = 2


@dc.dataclass(frozen=True, slots=True)
class HeadingOccurrence:
    """A single heading line found in the source document.

    Attributes
    ----------
    level : int
        Number of leading ``#`` characters (1 to 6).
    title : str
        Heading text with surrounding whitespace removed.
    id : str
        Slug derived from ``title`` via :func:`generate_id`.
    """

    level: int
    title: str
    id: str


@dc.dataclass(frozen=True, slots=True)
class MarkdownSection:
    """A contiguous run of lines opened by a boundary heading.

    Attributes
    ----------
    id : str
        Slug of the heading that opened the section. Not guaranteed unique.
    title : str
        Trimmed text of the opening heading.
    level : int
        Level of the opening heading: 1, 3 to 6, or 2 for an orphaned
        leading sub-title.
    content : str
        Section body without its own heading line, trimmed. Folded
        sub-titles and any text that preceded the first heading are kept.
    original_markdown : str
        Verbatim source lines of the section, heading line included.
    """

    id: str
    title: str
    level: int
    content: str
    original_markdown: str


@dc.dataclass(frozen=True, slots=True)
class ParsedDocument:
    """Aggregate result of :func:`parse_markdown_document`."""

    toc: list[TOCItem]
    sections: list[MarkdownSection]
    headings: list[HeadingOccurrence]


@dc.dataclass(slots=True)
class _OpenSection:
    """Mutable accumulator for the section currently being collected."""

    heading: HeadingOccurrence
    heading_index: int
    lines: list[str]

    def close(self) -> MarkdownSection:
        body = self.lines[: self.heading_index] + self.lines[self.heading_index + 1 :]
        return MarkdownSection(
            id=self.heading.id,
            title=self.heading.title,
            level=self.heading.level,
            content="\n".join(body).strip(),
            original_markdown="\n".join(self.lines),
        )


def generate_id(text: str) -> str:
    """Return a deterministic, URL-safe slug for ``text``.

    The text is lower-cased and stripped of anything but ASCII letters,
    digits, whitespace and hyphens. Whitespace runs then become single
    hyphens and hyphen runs collapse, with no hyphen left at either end.

    Examples
    --------
    >>> generate_id("Hello, World!")
    'hello-world'
    >>> generate_id("  Multiple   Spaces  ")
    'multiple-spaces'
    >>> generate_id("!!!")
    ''
    """
    slug = _DISALLOWED_ID_CHARS.sub("", text.lower())
    slug = _WHITESPACE_RUN.sub("-", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")


def match_heading(line: str) -> HeadingOccurrence | None:
    """Return the heading described by ``line`` or ``None`` for other lines."""
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    title = match.group(2).strip()
    return HeadingOccurrence(
        level=len(match.group(1)), title=title, id=generate_id(title)
    )


def extract_headings(markdown: str) -> list[HeadingOccurrence]:
    """Collect every heading line of ``markdown`` in document order.

    Parameters
    ----------
    markdown : str
        Raw Markdown text. Each line is tested on its own, so fenced code
        and other block constructs are not special-cased.

    Returns
    -------
    list[HeadingOccurrence]
        One entry per heading line; empty when the document has none.
    """
    headings: list[HeadingOccurrence] = []
    for line in markdown.split("\n"):
        heading = match_heading(line)
        if heading is not None:
            headings.append(heading)
    return headings


def _is_boundary(heading: HeadingOccurrence, current: _OpenSection | None) -> bool:
    """Return whether ``heading`` closes the open section and starts a new one."""
    return heading.level != SUBTITLE_LEVEL or current is None


def split_into_sections(markdown: str) -> list[MarkdownSection]:
    r"""Partition ``markdown`` into sections at level 1 and level 3+ headings.

    Level-2 headings are folded into whichever section is open. The only
    exception is a level-2 heading seen before any section exists, which
    opens a section of its own so leading content is not lost. Non-blank
    lines before the first section are prepended to it; blank ones are
    dropped. Sections consisting of nothing but their heading are omitted.

    Parameters
    ----------
    markdown : str
        Raw Markdown text.

    Returns
    -------
    list[MarkdownSection]
        Sections in document order. Empty when no heading is present.

    Examples
    --------
    >>> sections = split_into_sections("# T1\nbody1\n## Sub\nmore\n### T2\nbody2")
    >>> [(s.title, s.content) for s in sections]
    [('T1', 'body1\n## Sub\nmore'), ('T2', 'body2')]
    """
    sections: list[MarkdownSection] = []
    current: _OpenSection | None = None
    pre_header: list[str] = []
    opened_any = False

    for line in markdown.split("\n"):
        heading = match_heading(line)
        if heading is not None and _is_boundary(heading, current):
            if current is not None:
                sections.append(current.close())
            if opened_any:
                current = _OpenSection(heading=heading, heading_index=0, lines=[line])
            else:
                current = _OpenSection(
                    heading=heading,
                    heading_index=len(pre_header),
                    lines=[*pre_header, line],
                )
                pre_header = []
                opened_any = True
        elif current is not None:
            current.lines.append(line)
        elif line.strip():
            pre_header.append(line)

    if current is not None:
        sections.append(current.close())

    return [section for section in sections if not _is_vacuous(section)]


def _is_vacuous(section: MarkdownSection) -> bool:
    """Return whether ``section`` holds nothing beyond its own heading line."""
    if section.content:
        return False
    heading_line = section.original_markdown.strip()
    heading = match_heading(heading_line)
    return heading is not None and heading.title == section.title


def add_heading_ids(markdown: str) -> str:
    r"""Append a ``{#slug}`` attribute to every heading line of ``markdown``.

    The marker follows the Python-Markdown ``attr_list`` syntax so rendered
    headings carry the same id as their TOC entry. Non-heading lines are
    returned byte-for-byte unchanged, and a heading line ending in ``\r``
    keeps it after the marker. Lines are not interpreted, so a ``#`` line
    inside fenced code is annotated too.

    Examples
    --------
    >>> add_heading_ids("# Hello, World!\nbody")
    '# Hello, World! {#hello-world}\nbody'
    """
    lines: list[str] = []
    for line in markdown.split("\n"):
        heading = match_heading(line)
        if heading is None:
            lines.append(line)
        else:
            stem = line.removesuffix("\r")
            ending = line[len(stem) :]
            lines.append(ANCHOR_TEMPLATE.format(line=stem, slug=heading.id) + ending)
    return "\n".join(lines)


def parse_markdown_document(markdown: str) -> ParsedDocument:
    """Return the TOC forest, sections, and raw headings for ``markdown``.

    Headings are extracted once and shared with the TOC builder, while the
    section split runs independently over the same text. Nothing is cached
    between calls.
    """
    headings = extract_headings(markdown)
    return ParsedDocument(
        toc=build_toc(headings),
        sections=split_into_sections(markdown),
        headings=headings,
    )


def find_section_by_id(
    sections: cabc.Iterable[MarkdownSection], section_id: str
) -> MarkdownSection | None:
    """Return the first section whose id equals ``section_id``, if any."""
    return next((section for section in sections if section.id == section_id), None)


def section_body(section: MarkdownSection) -> str:
    """Return the section Markdown without a leading heading line.

    Only the first line is inspected: when text preceding the first heading
    was folded into ``section`` it is returned together with the heading.
    """
    lines = section.original_markdown.split("\n")
    if lines and match_heading(lines[0]) is not None:
        lines = lines[1:]
    return "\n".join(lines).strip()


__all__ = [
    "HEADING_PATTERN",
    "HeadingOccurrence",
    "MarkdownSection",
    "ParsedDocument",
    "add_heading_ids",
    "extract_headings",
    "find_section_by_id",
    "generate_id",
    "match_heading",
    "parse_markdown_document",
    "section_body",
    "split_into_sections",
]
