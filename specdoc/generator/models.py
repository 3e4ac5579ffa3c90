"""View models passed from the page generator to the spec page template."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True)
class TocEntryModel:
    """Sidebar navigation entry derived from a :class:`~specdoc.toc.TOCItem`.

    Attributes
    ----------
    label : str
        Heading text shown in the sidebar.
    anchor : str
        Fragment identifier targeted by the entry (without ``#``).
    level : int
        Heading level, used for indentation classes.
    children : list[TocEntryModel]
        Nested entries in document order.
    """

    label: str
    anchor: str
    level: int
    children: list[TocEntryModel] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class SectionModel:
    """Structured data for one collapsible section block.

    Attributes
    ----------
    title : str
        Section heading text.
    anchor : str
        Section id used as the block's ``id`` attribute.
    level : int
        Level of the heading that opened the section.
    order : int
        1-based position of the section on the page.
    html : str
        Rendered body HTML.
    original_markdown : str
        Verbatim section source offered by the copy button.
    is_open : bool
        Whether the block starts expanded; only the first section does.
    """

    title: str
    anchor: str
    level: int
    order: int
    html: str
    original_markdown: str
    is_open: bool = False


__all__ = ["SectionModel", "TocEntryModel"]
