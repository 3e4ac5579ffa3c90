"""Render specification sections into HTML with highlighted code blocks."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from specdoc.markdown_parser import generate_id

if typ.TYPE_CHECKING:
    from specdoc.markdown_parser import MarkdownSection

CODE_FENCE_PATTERN = re.compile(
    r"^[ ]{0,3}([`~]{3,})[ \t]*([A-Za-z0-9_+#.-]+)?", re.MULTILINE
)
FENCE_EXTRAS_PATTERN = re.compile(
    r"^[ ]{0,3}([`~]{3,})[ \t]*([A-Za-z0-9_+#.-]+)?[,{ \t][^\r\n]*$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')

MARKDOWN_EXTENSIONS = (
    "fenced_code",
    "codehilite",
    "tables",
    "sane_lists",
    "attr_list",
)


def _heading_slug(value: str, _separator: str) -> str:
    """Slug hook for the ``toc`` extension matching the sidebar anchors."""
    return generate_id(value)


class HtmlContentRenderer:
    """Convert section Markdown into HTML fragments for the spec template.

    Headings inside a section body receive the id that
    :func:`~specdoc.markdown_parser.generate_id` produces for their text, so
    every nested heading is reachable from the sidebar TOC. Ids are assigned
    by Python-Markdown's ``toc`` extension, which only sees real headings:
    ``#`` lines inside fenced code are rendered untouched.
    """

    def __init__(
        self, pygments_style: str = "monokai", *, inject_anchors: bool = True
    ) -> None:
        self.pygments_style = pygments_style
        self.inject_anchors = inject_anchors
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def section_html(self, section: MarkdownSection) -> str:
        """Render the body of ``section``; the heading is emitted by the template."""
        return self.markdown(section.content)

    def markdown(self, text: str) -> str:
        """Render Markdown into HTML. Returns ``""`` for blank input."""
        if not text.strip():
            return ""
        source = self._strip_fence_extras(text.replace("\r\n", "\n"))
        extensions = list(MARKDOWN_EXTENSIONS)
        extension_configs: dict[str, dict[str, typ.Any]] = {
            "codehilite": {
                "linenums": False,
                "guess_lang": False,
                "css_class": "codehilite",
                "pygments_style": self.pygments_style,
            }
        }
        if self.inject_anchors:
            extensions.append("toc")
            extension_configs["toc"] = {"slugify": _heading_slug}
        md = Markdown(extensions=extensions, extension_configs=extension_configs)
        return self._annotate_languages(md.convert(source), source)

    @staticmethod
    def _strip_fence_extras(text: str) -> str:
        """Reduce fence info strings such as ``rust,no_run`` to the language."""

        def _repl(match: re.Match[str]) -> str:
            fence, language = match.groups()
            return f"{fence}{language or ''}"

        return FENCE_EXTRAS_PATTERN.sub(_repl, text)

    @staticmethod
    def _annotate_languages(html: str, source_markdown: str) -> str:
        """Attach a ``data-language`` attribute to each highlighted block."""
        languages: list[str] = []
        open_fence: str | None = None
        for match in CODE_FENCE_PATTERN.finditer(source_markdown):
            fence, language = match.groups()
            if open_fence is None:
                open_fence = fence
                languages.append(language or "text")
            elif fence.startswith(open_fence) and not language:
                open_fence = None
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(_match: re.Match[str]) -> str:
            lang = escape(next(lang_iter, "text"), quote=True)
            return f'<div class="codehilite" data-language="{lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


__all__ = ["HtmlContentRenderer"]
