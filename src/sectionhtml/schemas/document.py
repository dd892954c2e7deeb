"""Document models accepted as JSON input."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from sectionhtml.exceptions import DocumentError
from sectionhtml.model import BodyContent, Element, ElementKind, Page


class ElementSpec(BaseModel):
    """An element and its nested elements.

    ``html`` is written before the children, which follow in order.
    """

    kind: ElementKind = ElementKind.SECTION
    id: str | None = None
    label: str = ""
    html: str | None = None
    children: list["ElementSpec"] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def blank_id_is_none(cls, v: str | None) -> str | None:
        """Treat blank ids as absent."""
        if v is None or not v.strip():
            return None
        return v.strip()

    def to_element(self) -> Element:
        element = Element(kind=self.kind, id=self.id, label=self.label, body=BodyContent(self.html or ""))
        for child in self.children:
            element.add_child(child.to_element())
        return element


class PageSpec(BaseModel):
    """A page: title, optional leading HTML, then its top-level elements."""

    title: str = Field(..., min_length=1)
    path: str | None = None
    html: str | None = None
    elements: list[ElementSpec] = Field(default_factory=list)

    def to_page(self) -> Page:
        """Build the page.

        Raises:
            DocumentError: If ids repeat on the page.
        """
        page = Page(title=self.title, path=self.path, body=BodyContent(self.html or ""))
        try:
            for spec in self.elements:
                page.add_child(spec.to_element())
        except ValueError as exc:
            raise DocumentError(str(exc)) from exc
        return page


class DocumentSpec(BaseModel):
    """One or more pages rendered together."""

    pages: list[PageSpec] = Field(..., min_length=1)

    def to_pages(self) -> list[Page]:
        return [spec.to_page() for spec in self.pages]
