"""Collaborators a render call needs from its surroundings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Protocol, TextIO

if TYPE_CHECKING:
    from sectionhtml.html_writer import HtmlWriter
    from sectionhtml.model import Element
    from sectionhtml.page_index import PageIndex


class ElementContext(Protocol):
    """Fragment inclusion and element dispatch for the current render."""

    page_index: PageIndex | None

    def include(self, template: str, sink: TextIO, params: Mapping[str, Any]) -> None:
        """Render the fragment ``template`` with ``params`` into ``sink``."""

    def write_element(self, element: Element, writer: HtmlWriter) -> None:
        """Render any element at the writer's current position."""
