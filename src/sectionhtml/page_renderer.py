"""Render pages and multi-page documents to HTML."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Sequence, TextIO

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from sectionhtml.body_writer import NodeBodyWriter
from sectionhtml.config import SECTIONHTML_TEMPLATES_PATH, SECTIONHTML_TOC_MIN_HEADINGS
from sectionhtml.html_writer import HtmlWriter
from sectionhtml.model import Element, ElementKind, Page
from sectionhtml.page_index import PageIndex, qualify_id
from sectionhtml.request_scope import RequestScope
from sectionhtml.section_renderer import write_aside, write_nav, write_section

logger = logging.getLogger(__name__)

PAGE_CLASS = "sectionhtml-page"

_SECTIONING_WRITERS = {
    ElementKind.SECTION: write_section,
    ElementKind.NAV: write_nav,
    ElementKind.ASIDE: write_aside,
}


def create_environment(templates_path: Path | None = None) -> Environment:
    """Jinja2 environment over the packaged templates.

    Templates found in ``templates_path`` take precedence over the packaged
    ones.
    """
    loaders = []
    if templates_path is not None:
        loaders.append(FileSystemLoader(str(templates_path)))
    loaders.append(PackageLoader("sectionhtml", "templates"))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


@lru_cache(maxsize=1)
def default_environment() -> Environment:
    return create_environment(SECTIONHTML_TEMPLATES_PATH)


@dataclass
class PageRenderContext:
    """Render context of one request: its scope, templates and page index."""

    scope: RequestScope
    environment: Environment = field(default_factory=default_environment)
    page_index: PageIndex | None = None
    toc_min_headings: int = SECTIONHTML_TOC_MIN_HEADINGS

    def include(self, template: str, sink: TextIO, params: Mapping[str, Any]) -> None:
        variables = {
            "page_index": self.page_index,
            "qualify_id": qualify_id,
            "toc_min_headings": self.toc_min_headings,
            **params,
        }
        for chunk in self.environment.get_template(template).generate(variables):
            sink.write(chunk)

    def write_element(self, element: Element, writer: HtmlWriter) -> None:
        write = _SECTIONING_WRITERS.get(element.kind)
        if write is not None:
            write(self.scope, writer, self, element)
            return
        element_id = qualify_id(self.page_index, element.page, element.id)
        with writer.element(element.tag, id=element_id):
            NodeBodyWriter(element, writer, self).write_body()


def write_page(writer: HtmlWriter, context: PageRenderContext, page: Page) -> None:
    """Write the page title as the level 1 heading, then the page body."""
    writer.heading(1, page.title)
    NodeBodyWriter(page, writer, context).write_body()


def render_page(
    page: Page,
    *,
    scope: RequestScope | None = None,
    environment: Environment | None = None,
) -> str:
    """Render a single page to an HTML string.

    Without ``scope`` the call is its own request: a scope is created for it
    and closed afterwards.
    """
    return render_document([page], scope=scope, environment=environment)


def render_document(
    pages: Sequence[Page],
    *,
    scope: RequestScope | None = None,
    environment: Environment | None = None,
) -> str:
    """Render pages into one HTML string.

    With more than one page, element ids are qualified per page and every
    page is wrapped in its own ``div``.
    """
    owns_scope = scope is None
    request_scope = RequestScope() if scope is None else scope
    page_index = PageIndex(pages) if len(pages) > 1 else None
    context = PageRenderContext(
        scope=request_scope,
        environment=environment or default_environment(),
        page_index=page_index,
    )
    sink = io.StringIO()
    writer = HtmlWriter(sink)
    try:
        if page_index is None:
            for page in pages:
                write_page(writer, context, page)
        else:
            for number, page in enumerate(page_index.pages, start=1):
                with writer.element("div", id=f"page{number}", classes=(PAGE_CLASS,)):
                    write_page(writer, context, page)
    finally:
        if owns_scope:
            request_scope.close()
    logger.debug("Rendered %d page(s), %d characters", len(pages), sink.tell())
    return sink.getvalue()
