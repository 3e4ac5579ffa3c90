"""Cyclopts CLI entrypoint for structuring and rendering generated specifications.

The ``specdoc`` console script defined here renders configured specifications
into navigable HTML pages, prints the outline or section partition of a
Markdown file, and writes anchor-annotated Markdown for downstream renderers.
Typical usage involves running ``specdoc render`` in CI to regenerate pages
and ``specdoc sections --json`` when another service needs the structure.

Examples
--------
Render every configured specification:

>>> from specdoc.cli import main
>>> main()  # doctest: +SKIP

Print the outline of a local file:

>>> from specdoc.cli import app
>>> app(["outline", "spec.md"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .generator import SpecPageGenerator
from .logs import configure_logging
from .markdown_parser import add_heading_ids, parse_markdown_document
from .toc import iter_toc

DEFAULT_CONFIG = Path("config/specdoc.yaml")

app = App(
    name="specdoc",
    config=cyclopts.config.Env("INPUT_", command=False),  # type: ignore[unknown-argument]
)

LogLevel = typ.Annotated[
    str,
    Parameter(
        help="Log level for diagnostics on stderr", env_var="SPECDOC_LOG_LEVEL"
    ),
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _read_markdown(path: Path) -> str:
    """Read a Markdown file, raising a descriptive error when it is missing."""
    if not path.exists():
        msg = f"Markdown file '{path}' not found."
        raise FileNotFoundError(msg)
    return path.read_text(encoding="utf-8")


@app.command(help="Render configured specifications into navigable HTML pages.")
def render(
    *,
    document: typ.Annotated[
        str | None, Parameter(help="Document key", env_var="INPUT_DOCUMENT")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    source: typ.Annotated[
        Path | None,
        Parameter(help="Override the Markdown source file", env_var="INPUT_SOURCE"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Render specification pages for the requested site configuration.

    Parameters
    ----------
    document : str or None, optional
        Specific document key to render; when ``None`` (default) all
        documents are rendered.
    config : Path, optional
        Path to the ``specdoc.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    source : Path or None, optional
        Local Markdown file to render instead of the configured source.
    output_dir : Path or None, optional
        Override output directory for single-document rendering.

    Raises
    ------
    ValueError
        If ``source`` or ``output_dir`` overrides are supplied when more
        than one document is selected.
    """
    site_config = load_site_config(config)
    configure_logging(site_config.logging.level, site_config.logging.format)

    if document:
        targets = [site_config.get_document(document)]
    else:
        targets = list(site_config.documents.values())

    if len(targets) > 1 and (source or output_dir):
        msg = "Cannot override source/output_dir when rendering multiple documents."
        raise ValueError(msg)

    for target in targets:
        generator = SpecPageGenerator(target, source_path=source, output_dir=output_dir)
        written = generator.run()
        print(f"wrote {_format_path(written)}")


@app.command(help="Print the heading outline of a Markdown file.")
def outline(path: Path, /, *, log_level: LogLevel = "WARNING") -> None:
    """Print the table of contents of ``path`` as an indented tree."""
    configure_logging(log_level)
    parsed = parse_markdown_document(_read_markdown(path))
    for depth, item in iter_toc(parsed.toc):
        print(f"{'  ' * depth}- {item.title} (#{item.id})")


@app.command(help="List the sections a Markdown file is split into.")
def sections(
    path: Path,
    /,
    *,
    as_json: typ.Annotated[
        bool, Parameter(name="--json", help="Emit toc, sections and headings as JSON")
    ] = False,
    log_level: LogLevel = "WARNING",
) -> None:
    """Print the sections of ``path``, or the full parse result as JSON."""
    configure_logging(log_level)
    parsed = parse_markdown_document(_read_markdown(path))
    if as_json:
        print(json.dumps(dc.asdict(parsed), indent=2, ensure_ascii=False))
        return
    for order, section in enumerate(parsed.sections, start=1):
        print(f"{order}. [h{section.level}] {section.title} (#{section.id})")


@app.command(help="Write Markdown with {#id} anchors appended to every heading.")
def anchors(
    path: Path,
    /,
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Write to this file instead of stdout")
    ] = None,
    log_level: LogLevel = "WARNING",
) -> None:
    """Inject heading anchors into ``path`` and print or save the result."""
    configure_logging(log_level)
    annotated = add_heading_ids(_read_markdown(path))
    if output is None:
        print(annotated)
        return
    output.write_text(annotated, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``specdoc`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
