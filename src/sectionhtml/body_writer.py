"""Stream node bodies, rendering child elements and qualifying same-page links."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sectionhtml.page_index import qualify_id

if TYPE_CHECKING:
    from sectionhtml.context import ElementContext
    from sectionhtml.html_writer import HtmlWriter
    from sectionhtml.model import Element, Node, Page

_FRAGMENT_HREF_RE = re.compile(r"""href=(["'])#([^"']+)\1""")


class NodeBodyWriter:
    """Writes the body of ``node`` into ``writer``.

    Child elements are rendered through the context where the body holds
    them. Fragment links to ids of the owning page are rewritten to their
    page-qualified form so they keep working when several pages are rendered
    together.
    """

    def __init__(self, node: Node, writer: HtmlWriter, context: ElementContext) -> None:
        self.node = node
        self.writer = writer
        self.context = context

    def write_body(self) -> None:
        self.node.body.write_to(self._write_markup, self._write_child)

    def _write_child(self, child: Element) -> None:
        self.context.write_element(child, self.writer)

    def _write_markup(self, markup: str) -> None:
        page = self.node.owning_page()
        if self.context.page_index is not None and page is not None:
            markup = _FRAGMENT_HREF_RE.sub(
                lambda match: self._qualify_href(match, page),
                markup,
            )
        self.writer.raw.write(markup)

    def _qualify_href(self, match: re.Match[str], page: Page) -> str:
        quote, target = match.group(1), match.group(2)
        if page.element_by_id(target) is None:
            return match.group(0)
        return f"href={quote}#{qualify_id(self.context.page_index, page, target)}{quote}"
