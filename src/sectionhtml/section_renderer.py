"""Write sections, navs and asides as HTML."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator

from sectionhtml.body_writer import NodeBodyWriter
from sectionhtml.config import SECTIONHTML_TOC_TEMPLATE
from sectionhtml.exceptions import DepthExceededError, RenderingError, SectionHtmlError, SkipPageError
from sectionhtml.model import ElementKind
from sectionhtml.page_index import qualify_id
from sectionhtml.request_scope import IdentityMap

if TYPE_CHECKING:
    from sectionhtml.context import ElementContext
    from sectionhtml.html_writer import HtmlWriter
    from sectionhtml.model import Element, Page
    from sectionhtml.request_scope import RequestScope

logger = logging.getLogger(__name__)

TOC_DONE_PER_PAGE_ATTRIBUTE = f"{__name__}.toc_done_per_page"
SECTION_CLASS = "sectionhtml-section"

_FIRST_SECTIONING_LEVEL = 2  # <h1> is reserved for page titles
_LAST_HEADING_LEVEL = 6

# Passed through to the caller as-is; anything else is wrapped in RenderingError.
EXPECTED_SIGNALS: tuple[type[BaseException], ...] = (SkipPageError, OSError, SectionHtmlError)


@contextmanager
def _wrap_unexpected(description: str) -> Iterator[None]:
    try:
        yield
    except EXPECTED_SIGNALS:
        raise
    except Exception as exc:
        raise RenderingError(f"Failed to {description}: {exc}") from exc


def resolve_level(element: Element) -> int:
    """Heading level of ``element`` from the sectioning regions around it.

    Starts at 2 and adds one per sectioning ancestor; plain containers are
    skipped.

    Raises:
        DepthExceededError: If the level would go past h6.
    """
    level = _FIRST_SECTIONING_LEVEL
    parent = element.parent
    while parent is not None:
        if parent.is_sectioning_region:
            level += 1
        parent = parent.parent
    if level > _LAST_HEADING_LEVEL:
        raise DepthExceededError(level)
    return level


def ensure_toc_written(
    scope: RequestScope,
    page: Page,
    write_toc_fragment: Callable[[Page], None],
) -> None:
    """Call ``write_toc_fragment`` for ``page`` unless already done in this request.

    The page is marked before the fragment is written, so a failing writer is
    not retried within the same request.
    """
    toc_done_per_page = scope.attribute(TOC_DONE_PER_PAGE_ATTRIBUTE).compute_if_absent(
        lambda _name: IdentityMap()
    )
    if toc_done_per_page.put_if_absent(page, True) is None:
        logger.debug("Writing table of contents for page %r", page.title)
        write_toc_fragment(page)


def write_toc(scope: RequestScope, writer: HtmlWriter, context: ElementContext, page: Page) -> None:
    """Include the table of contents fragment, if not yet written on the page."""
    ensure_toc_written(
        scope,
        page,
        lambda toc_page: context.include(SECTIONHTML_TOC_TEMPLATE, writer.raw, {"page": toc_page}),
    )


def write_sectioning_content(
    scope: RequestScope,
    writer: HtmlWriter,
    context: ElementContext,
    element: Element,
) -> None:
    """Write a sectioning element with its heading and body."""
    if not element.is_sectioning_region:
        raise TypeError(f"Not a sectioning element: {element.kind.value}")

    page = element.page
    if page is not None:
        with _wrap_unexpected("write table of contents"):
            write_toc(scope, writer, context, page)

    try:
        level = resolve_level(element)
    except DepthExceededError:
        logger.debug("Sectioning too deep for %r on page %r", element.label, page and page.title)
        raise

    element_id = qualify_id(context.page_index, page, element.id)
    with _wrap_unexpected(f"write {element.tag} {element.label!r}"):
        with writer.element(element.tag, id=element_id, classes=(SECTION_CLASS,)):
            writer.heading(level, element.label)
            if element.body.length > 0:
                with writer.element("div", classes=(f"{SECTION_CLASS}-h{level}-content",)):
                    NodeBodyWriter(element, writer, context).write_body()


def _write_kind(
    kind: ElementKind,
    scope: RequestScope,
    writer: HtmlWriter,
    context: ElementContext,
    element: Element,
) -> None:
    if element.kind is not kind:
        raise TypeError(f"Expected a {kind.value}, got a {element.kind.value}")
    write_sectioning_content(scope, writer, context, element)


def write_aside(scope: RequestScope, writer: HtmlWriter, context: ElementContext, aside: Element) -> None:
    """Writes the given aside."""
    _write_kind(ElementKind.ASIDE, scope, writer, context, aside)


def write_nav(scope: RequestScope, writer: HtmlWriter, context: ElementContext, nav: Element) -> None:
    """Writes the given nav."""
    _write_kind(ElementKind.NAV, scope, writer, context, nav)


def write_section(scope: RequestScope, writer: HtmlWriter, context: ElementContext, section: Element) -> None:
    """Writes the given section."""
    _write_kind(ElementKind.SECTION, scope, writer, context, section)
