"""sectionhtml: render nested sections, navs and asides as HTML."""

from sectionhtml.exceptions import (
    DepthExceededError,
    DocumentError,
    FetchError,
    RenderingError,
    SectionHtmlError,
    SkipPageError,
    SourceNotAvailableError,
)
from sectionhtml.html_parser import parse_document_html
from sectionhtml.model import BodyContent, Element, ElementKind, Page, aside, container, nav, section
from sectionhtml.page_index import PageIndex, qualify_id
from sectionhtml.page_renderer import PageRenderContext, render_document, render_page
from sectionhtml.request_scope import IdentityMap, RequestScope
from sectionhtml.schemas import DocumentSpec, ElementSpec, PageSpec
from sectionhtml.section_renderer import (
    ensure_toc_written,
    resolve_level,
    write_aside,
    write_nav,
    write_section,
    write_sectioning_content,
    write_toc,
)

__all__ = [
    "BodyContent",
    "DepthExceededError",
    "DocumentError",
    "DocumentSpec",
    "Element",
    "ElementKind",
    "ElementSpec",
    "FetchError",
    "IdentityMap",
    "Page",
    "PageIndex",
    "PageRenderContext",
    "PageSpec",
    "RenderingError",
    "RequestScope",
    "SectionHtmlError",
    "SkipPageError",
    "SourceNotAvailableError",
    "aside",
    "container",
    "ensure_toc_written",
    "nav",
    "parse_document_html",
    "qualify_id",
    "render_document",
    "render_page",
    "resolve_level",
    "section",
    "write_aside",
    "write_nav",
    "write_section",
    "write_sectioning_content",
    "write_toc",
]
