"""CLI interface for epub2text."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from epub2text import __version__
from epub2text.chapter import parse_chapter
from epub2text.errors import UnparsableDocumentError
from epub2text.options import DEFAULT_ASPECT_RATIO, ChapterParseOptions
from epub2text.resources import load_resource_table

app = typer.Typer(
    name="epub2text",
    help="Flatten e-book chapter documents into reader-ready plain text.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@app.command()
def parse(
    document: Annotated[
        Path,
        typer.Argument(
            help="Path to the chapter XHTML/HTML file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            help="Unpacked container root (default: the document's directory)",
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    images: Annotated[
        bool,
        typer.Option(
            "--images/--no-images",
            help="Emit inline image markers instead of stripping images (default: no)",
        ),
    ] = False,
    parser: Annotated[
        str,
        typer.Option(
            "--parser",
            help="Markup parser: 'html.parser', 'lxml' or 'html5lib'",
        ),
    ] = "html.parser",
    fallback_ratio: Annotated[
        float,
        typer.Option(
            "--fallback-ratio",
            help="Height/width ratio for missing or undecodable images",
        ),
    ] = DEFAULT_ASPECT_RATIO,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print {title, body} as JSON"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log parsing decisions to stderr"),
    ] = False,
) -> None:
    """
    Parse one chapter document and print its title and flattened text.

    Examples:

        # Chapter inside an unpacked book, images as markers
        epub2text parse book/OEBPS/text/ch1.xhtml --root book --images

        # Machine-readable output
        epub2text parse ch1.xhtml --json
    """
    _configure_logging(verbose)

    try:
        options = ChapterParseOptions.from_cli(
            images="on" if images else "off",
            parser=parser,
            fallback_aspect_ratio=fallback_ratio,
        )
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    root_dir = (root or document.parent).resolve()
    doc_path = document.resolve()
    try:
        document_path = doc_path.relative_to(root_dir).as_posix()
    except ValueError as exc:
        typer.echo(f"Error: {document} is not inside root {root_dir}", err=True)
        raise typer.Exit(1) from exc

    resources = load_resource_table(root_dir) if images else {}

    try:
        chapter = parse_chapter(doc_path.read_bytes(), document_path, resources, options)
    except UnparsableDocumentError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if as_json:
        typer.echo(json.dumps({"title": chapter.title, "body": chapter.body}, ensure_ascii=False))
        return

    if chapter.title is not None:
        typer.echo(chapter.title)
        typer.echo("")
    typer.echo(chapter.body)


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"epub2text version {__version__}")


def version_callback(value: bool) -> None:
    """Version callback for --version flag."""
    if value:
        typer.echo(f"epub2text version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """
    epub2text - flatten e-book chapter documents into plain text.

    Each chapter's first heading becomes its title; paragraphs are separated
    by blank lines and images can be kept as inline markers that carry the
    resource path and aspect ratio.

    For detailed usage, run: epub2text parse --help
    """
    pass


if __name__ == "__main__":  # pragma: no cover - executed only via `python -m`
    app()
