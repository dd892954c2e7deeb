"""Parse HTML source documents into the page model."""

from __future__ import annotations

import re

from markupsafe import escape

from sectionhtml.exceptions import DocumentError
from sectionhtml.model import Element, ElementKind, Node, Page

try:
    from bs4 import BeautifulSoup
    from bs4.element import Comment, NavigableString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise DocumentError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


_HEADING_RE = re.compile(r"^h[1-6]$")
_SECTIONING_TAGS = {
    "section": ElementKind.SECTION,
    "nav": ElementKind.NAV,
    "aside": ElementKind.ASIDE,
}
DEFAULT_TITLE = "Untitled"


def parse_document_html(html: str, *, path: str | None = None) -> Page:
    """Build a page from HTML.

    ``<section>``, ``<nav>`` and ``<aside>`` become sectioning elements,
    labelled by their ``data-label`` attribute or their first heading. Any
    other tag wrapping sectioning content becomes a plain container; the rest
    is kept as body markup. The page title comes from ``<title>`` or the
    first ``<h1>``; an ``<h1>`` is kept in the body unless it names the page.

    Raises:
        DocumentError: If ids repeat within the document.
    """
    soup = BeautifulSoup(html, "lxml")
    root = soup.body or soup
    title, title_heading = _extract_title(soup, root)

    page = Page(title=title, path=path)
    try:
        _collect_content(root, page, skip=title_heading)
    except ValueError as exc:
        raise DocumentError(str(exc)) from exc
    return page


def _extract_title(soup: BeautifulSoup, root: Tag) -> tuple[str, Tag | None]:
    if soup.title and soup.title.get_text(strip=True):
        title = soup.title.get_text(" ", strip=True)
        heading = root.find("h1", recursive=False)
        # A top-level h1 is only dropped when it repeats the title.
        if heading and heading.get_text(" ", strip=True) == title:
            return title, heading
        return title, None
    heading = root.find("h1")
    if heading and not heading.find_parent(list(_SECTIONING_TAGS)):
        return heading.get_text(" ", strip=True), heading
    return DEFAULT_TITLE, None


def _collect_content(source: Tag, node: Node, *, skip: Tag | None = None) -> None:
    for child in source.children:
        if child is skip:
            continue
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            if child.strip():
                node.body.append(str(escape(str(child))))
            continue
        if not isinstance(child, Tag):
            continue
        kind = _SECTIONING_TAGS.get(child.name)
        if kind is not None:
            node.add_child(_build_sectioning(child, kind))
        elif child.find(list(_SECTIONING_TAGS)):
            wrapper = Element(kind=ElementKind.CONTAINER, id=child.get("id"))
            node.add_child(wrapper)
            _collect_content(child, wrapper)
        else:
            node.body.append(str(child))


def _build_sectioning(tag: Tag, kind: ElementKind) -> Element:
    label = tag.get("data-label")
    heading = None
    if not label:
        heading = _first_heading(tag)
        label = heading.get_text(" ", strip=True) if heading else ""
    element = Element(kind=kind, id=tag.get("id"), label=label)
    _collect_content(tag, element, skip=heading)
    return element


def _first_heading(tag: Tag) -> Tag | None:
    for child in tag.children:
        if isinstance(child, Tag) and _HEADING_RE.match(child.name or ""):
            return child
        if isinstance(child, Tag):
            return None
    return None
