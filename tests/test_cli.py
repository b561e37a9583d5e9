from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from epub2text import __version__
from epub2text.cli import app
from epub2text.markers import find_image_markers
from epub2text.types import ImgEntry

CHAPTER = (
    "<html><body>"
    "<h1>Chapter One</h1>"
    "<p>It was a dark night.</p>"
    '<p><img src="../images/cover%20art.png"/></p>'
    "</body></html>"
)


@pytest.fixture
def book(tmp_path: Path, png_bytes) -> Path:
    root = tmp_path / "book"
    (root / "OEBPS" / "text").mkdir(parents=True)
    (root / "OEBPS" / "images").mkdir(parents=True)
    (root / "OEBPS" / "text" / "ch1.xhtml").write_text(CHAPTER, encoding="utf-8")
    (root / "OEBPS" / "images" / "cover art.png").write_bytes(png_bytes(100, 160))
    return root


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "e-book chapter documents" in result.stdout


def test_cli_version_command_and_flag() -> None:
    runner = CliRunner()
    res1 = runner.invoke(app, ["version"])
    assert res1.exit_code == 0
    assert __version__ in res1.stdout

    res2 = runner.invoke(app, ["--version"])
    assert res2.exit_code == 0
    assert __version__ in res2.stdout


def test_parse_plain_output_strips_images(book: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["parse", str(book / "OEBPS" / "text" / "ch1.xhtml")])
    assert result.exit_code == 0
    assert result.stdout.startswith("Chapter One\n\nIt was a dark night.\n")
    assert "<img" not in result.stdout


def test_parse_json_with_images(book: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "parse",
            str(book / "OEBPS" / "text" / "ch1.xhtml"),
            "--root",
            str(book),
            "--images",
            "--json",
        ],
    )
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["title"] == "Chapter One"
    assert data["body"].startswith("It was a dark night.\n\n")
    assert find_image_markers(data["body"]) == [ImgEntry("OEBPS/images/cover art.png", 1.6)]


def test_parse_fallback_ratio_without_root(book: Path) -> None:
    # With the default root the image directory is outside the container
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "parse",
            str(book / "OEBPS" / "text" / "ch1.xhtml"),
            "--images",
            "--fallback-ratio",
            "2.5",
            "--json",
        ],
    )
    assert result.exit_code == 0
    body = json.loads(result.stdout)["body"]
    assert find_image_markers(body) == [ImgEntry("../images/cover art.png", 2.5)]


def test_parse_rejects_invalid_parser(book: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app, ["parse", str(book / "OEBPS" / "text" / "ch1.xhtml"), "--parser", "xml"]
    )
    assert result.exit_code == 1
    assert "Invalid parser 'xml'" in result.output


def test_parse_reports_unparsable_document(tmp_path: Path) -> None:
    doc = tmp_path / "bad.xhtml"
    doc.write_bytes(b"<p>\xff\xfe</p>")

    runner = CliRunner()
    result = runner.invoke(app, ["parse", str(doc)])
    assert result.exit_code == 1
    assert "Failed to parse document bad.xhtml" in result.output


def test_parse_rejects_document_outside_root(book: Path, tmp_path: Path) -> None:
    other = tmp_path / "elsewhere"
    other.mkdir()

    runner = CliRunner()
    result = runner.invoke(
        app, ["parse", str(book / "OEBPS" / "text" / "ch1.xhtml"), "--root", str(other)]
    )
    assert result.exit_code == 1
    assert "is not inside root" in result.output


def test_parse_verbose_runs(book: Path, isolate_logging: None) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["parse", str(book / "OEBPS" / "text" / "ch1.xhtml"), "-v"])
    assert result.exit_code == 0
    assert "It was a dark night." in result.output
