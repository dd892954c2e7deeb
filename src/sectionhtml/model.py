"""Document tree model: pages and the sectioning elements they own."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator


class ElementKind(str, Enum):
    """Closed set of element variants."""

    SECTION = "section"
    NAV = "nav"
    ASIDE = "aside"
    CONTAINER = "container"

    @property
    def tag(self) -> str:
        """HTML tag opened for this kind of element."""
        if self is ElementKind.CONTAINER:
            return "div"
        return self.value

    @property
    def is_sectioning_region(self) -> bool:
        """Whether this kind contributes to heading-level nesting."""
        return self is not ElementKind.CONTAINER


class BodyContent:
    """Body of a node: markup interleaved with the node's child elements.

    Markup given up front may be a string or an iterable of chunks; chunks are
    joined on first use. Child elements are held as segments of their own, so
    no markup text can stand in for a child.
    """

    def __init__(self, source: str | Iterable[str] = "") -> None:
        self._source = source
        self._leading: str | None = source if isinstance(source, str) else None
        self._segments: list[str | Element] = []

    @classmethod
    def empty(cls) -> BodyContent:
        return cls("")

    @classmethod
    def coerce(cls, value: BodyContent | str | Iterable[str] | None) -> BodyContent:
        if value is None:
            return cls.empty()
        if isinstance(value, BodyContent):
            return value
        return cls(value)

    def _leading_text(self) -> str:
        if self._leading is None:
            self._leading = "".join(self._source)
        return self._leading

    def segments(self) -> Iterator[str | Element]:
        """Markup strings and child elements in document order."""
        leading = self._leading_text()
        if leading:
            yield leading
        yield from self._segments

    @property
    def text(self) -> str:
        """The markup of the body, child elements left out."""
        return "".join(segment for segment in self.segments() if isinstance(segment, str))

    @property
    def length(self) -> int:
        """Markup length plus one for each child element position."""
        return sum(len(segment) if isinstance(segment, str) else 1 for segment in self.segments())

    def __len__(self) -> int:
        return self.length

    def append(self, text: str) -> None:
        if not text:
            return
        if self._segments and isinstance(self._segments[-1], str):
            self._segments[-1] += text
        else:
            self._segments.append(text)

    def append_element(self, element: Element) -> None:
        self._segments.append(element)

    def write_to(
        self,
        write_markup: Callable[[str], object],
        write_element: Callable[[Element], object],
    ) -> None:
        """Stream the body, handing markup and child elements to their writers."""
        for segment in self.segments():
            if isinstance(segment, str):
                write_markup(segment)
            else:
                write_element(segment)

    def __repr__(self) -> str:
        return f"BodyContent(length={self.length})"


@dataclass(eq=False, kw_only=True)
class Node(ABC):
    """Shared structure of pages and elements: a body and child elements."""

    body: BodyContent = field(default_factory=BodyContent.empty)
    children: list[Element] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.body = BodyContent.coerce(self.body)

    @abstractmethod
    def _parent_element(self) -> Element | None:
        """Element recorded as `parent` of children attached here."""

    @abstractmethod
    def owning_page(self) -> Page | None:
        """Page this node belongs to, if any."""

    def add_child(self, element: Element) -> Element:
        """Attach ``element`` and place it at the end of the body.

        Raises:
            ValueError: If the element is already attached, would create a
                cycle, or reuses an id already taken on the owning page.
        """
        if element._owner is not None:
            raise ValueError(f"Element {element.label or element.id!r} is already attached")
        ancestor = self._parent_element()
        while ancestor is not None:
            if ancestor is element:
                raise ValueError("An element cannot be attached inside itself")
            ancestor = ancestor.parent

        page = self.owning_page()
        if page is not None:
            page._register_subtree(element)

        self.children.append(element)
        element._owner = self
        element.parent = self._parent_element()
        if page is not None:
            element._set_page(page)
        self.body.append_element(element)
        return element

    def sectioning_children(self) -> list[Element]:
        """Nearest sectioning descendants, looking through plain containers."""
        found: list[Element] = []
        for child in self.children:
            if child.is_sectioning_region:
                found.append(child)
            else:
                found.extend(child.sectioning_children())
        return found

    def iter_elements(self) -> Iterator[Element]:
        """Iterate over all descendant elements, depth first."""
        for child in self.children:
            yield child
            yield from child.iter_elements()


@dataclass(eq=False, kw_only=True)
class Element(Node):
    """A node of the document tree, possibly a sectioning region."""

    kind: ElementKind = ElementKind.CONTAINER
    id: str | None = None
    label: str = ""
    parent: Element | None = field(default=None, repr=False)
    page: Page | None = field(default=None, repr=False)
    _owner: Node | None = field(default=None, init=False, repr=False)

    @property
    def is_sectioning_region(self) -> bool:
        return self.kind.is_sectioning_region

    @property
    def tag(self) -> str:
        return self.kind.tag

    def _parent_element(self) -> Element | None:
        return self

    def owning_page(self) -> Page | None:
        return self.page

    def _set_page(self, page: Page) -> None:
        self.page = page
        for child in self.children:
            child._set_page(page)

    def __str__(self) -> str:
        return self.label


@dataclass(eq=False, kw_only=True)
class Page(Node):
    """A document unit. Pages compare by identity only."""

    title: str
    path: str | None = None
    _ids: dict[str, Element] = field(default_factory=dict, init=False, repr=False)

    def _parent_element(self) -> Element | None:
        return None

    def owning_page(self) -> Page | None:
        return self

    def _register_subtree(self, element: Element) -> None:
        pending: dict[str, Element] = {}
        for candidate in (element, *element.iter_elements()):
            if candidate.id is None:
                continue
            if candidate.id in self._ids or candidate.id in pending:
                raise ValueError(f"Duplicate id {candidate.id!r} on page {self.title!r}")
            pending[candidate.id] = candidate
        self._ids.update(pending)

    def element_by_id(self, element_id: str) -> Element | None:
        return self._ids.get(element_id)

    def count_sectioning(self) -> int:
        """Count sectioning elements anywhere on the page."""
        return sum(1 for element in self.iter_elements() if element.is_sectioning_region)

    def __str__(self) -> str:
        return self.title


def _make(
    kind: ElementKind,
    label: str,
    id: str | None,
    body: BodyContent | str | Iterable[str] | None,
) -> Element:
    return Element(kind=kind, label=label, id=id, body=BodyContent.coerce(body))


def section(label: str, *, id: str | None = None, body: BodyContent | str | Iterable[str] | None = None) -> Element:
    return _make(ElementKind.SECTION, label, id, body)


def nav(label: str, *, id: str | None = None, body: BodyContent | str | Iterable[str] | None = None) -> Element:
    return _make(ElementKind.NAV, label, id, body)


def aside(label: str, *, id: str | None = None, body: BodyContent | str | Iterable[str] | None = None) -> Element:
    return _make(ElementKind.ASIDE, label, id, body)


def container(*, id: str | None = None, body: BodyContent | str | Iterable[str] | None = None) -> Element:
    """Plain, non-sectioning wrapper element."""
    return _make(ElementKind.CONTAINER, "", id, body)
