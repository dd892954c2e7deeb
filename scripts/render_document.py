"""Render a source document to HTML from the command line."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from sectionhtml.exceptions import SectionHtmlError
from sectionhtml.fetch import fetch_document
from sectionhtml.html_parser import parse_document_html
from sectionhtml.model import Page
from sectionhtml.page_renderer import render_document
from sectionhtml.schemas import DocumentSpec
from sectionhtml.utils.logging_config import get_logger

logger = get_logger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Render sections, navs and asides as nested HTML.")
    parser.add_argument("--url", help="URL of an HTML source document")
    parser.add_argument("--file", help="Local HTML source document")
    parser.add_argument("--json", dest="json_file", help="Local JSON document with one or more pages")
    parser.add_argument("--output", help="Write the HTML here instead of stdout")
    args = parser.parse_args()

    if sum(bool(source) for source in (args.url, args.file, args.json_file)) != 1:
        parser.error("Provide exactly one of --url, --file or --json")

    try:
        pages = load_pages(url=args.url, file_path=args.file, json_path=args.json_file)
        html = render_document(pages)
    except SectionHtmlError as exc:
        logger.error("Rendering failed", extra={"error": str(exc)})
        sys.exit(1)

    if args.output:
        Path(args.output).write_text(html, encoding="utf-8")
    else:
        print(html)


def load_pages(*, url: str | None, file_path: str | None, json_path: str | None) -> list[Page]:
    if url:
        return [asyncio.run(fetch_document(url))]

    path = Path(file_path or json_path or "")
    if not path.is_file():
        raise FileNotFoundError(f"Source document not found: {path}")
    text = path.read_text(encoding="utf-8")
    if json_path:
        return DocumentSpec.model_validate(json.loads(text)).to_pages()
    return [parse_document_html(text, path=str(path))]


if __name__ == "__main__":
    main()
