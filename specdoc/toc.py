"""Build and walk the nested table of contents for a specification.

The outline is a forest: a document may open with several top-level headings,
and levels may be skipped (an H1 followed directly by an H4) or appear out of
order (an H3 before the first H1). :func:`build_toc` never synthesises
intermediate nodes; a heading simply attaches under the nearest open heading
of strictly lower level.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .markdown_parser import HeadingOccurrence


@dc.dataclass(frozen=True, slots=True)
class TOCItem:
    """One heading in the outline together with its nested headings.

    Attributes
    ----------
    id : str
        Heading slug, shared with the rendered anchor.
    title : str
        Heading text.
    level : int
        Heading level (1 to 6).
    children : list[TOCItem]
        Directly nested headings in document order. Every child has a
        strictly greater ``level`` than this item.
    """

    id: str
    title: str
    level: int
    children: list[TOCItem] = dc.field(default_factory=list)


def build_toc(headings: cabc.Iterable[HeadingOccurrence]) -> list[TOCItem]:
    """Nest ``headings`` into an ordered forest of :class:`TOCItem` roots.

    Parameters
    ----------
    headings : Iterable[HeadingOccurrence]
        Headings in document order, typically from
        :func:`~specdoc.markdown_parser.extract_headings`.

    Returns
    -------
    list[TOCItem]
        Top-level items. Empty when ``headings`` is empty.

    Examples
    --------
    >>> from specdoc.markdown_parser import extract_headings
    >>> toc = build_toc(extract_headings("# A\\n#### B\\n# C"))
    >>> [(item.title, [child.title for child in item.children]) for item in toc]
    [('A', ['B']), ('C', [])]
    """
    roots: list[TOCItem] = []
    ancestors: list[TOCItem] = []

    for heading in headings:
        item = TOCItem(id=heading.id, title=heading.title, level=heading.level)
        # A heading closes every open entry at its own level or deeper.
        while ancestors and ancestors[-1].level >= heading.level:
            ancestors.pop()
        if ancestors:
            ancestors[-1].children.append(item)
        else:
            roots.append(item)
        ancestors.append(item)

    return roots


def iter_toc(
    toc: cabc.Iterable[TOCItem], depth: int = 0
) -> cabc.Iterator[tuple[int, TOCItem]]:
    """Yield ``(depth, item)`` pairs in depth-first pre-order."""
    for item in toc:
        yield depth, item
        yield from iter_toc(item.children, depth + 1)


def flatten_toc(toc: cabc.Iterable[TOCItem]) -> list[TOCItem]:
    """Return every item of ``toc`` in document order, for sidebar navigation."""
    return [item for _depth, item in iter_toc(toc)]


__all__ = ["TOCItem", "build_toc", "flatten_toc", "iter_toc"]
