"""Streaming HTML emission with escaped text and scoped elements."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, TextIO

from markupsafe import escape

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6


class HtmlWriter:
    """Writes HTML into a text sink.

    Text and attribute values go through :func:`markupsafe.escape`; only
    :attr:`raw` writes markup unescaped.
    """

    def __init__(self, sink: TextIO) -> None:
        self._sink = sink

    @property
    def raw(self) -> TextIO:
        """The underlying sink, for already-rendered markup."""
        return self._sink

    def text(self, value: object) -> HtmlWriter:
        self._sink.write(str(escape(value)))
        return self

    def start_tag(self, tag: str, *, id: str | None = None, classes: Iterable[str] = ()) -> None:
        parts = [f"<{tag}"]
        if id is not None:
            parts.append(f' id="{escape(id)}"')
        class_list = [cls for cls in classes if cls]
        if class_list:
            parts.append(f' class="{escape(" ".join(class_list))}"')
        parts.append(">")
        self._sink.write("".join(parts))

    def end_tag(self, tag: str) -> None:
        self._sink.write(f"</{tag}>")

    @contextmanager
    def element(
        self,
        tag: str,
        *,
        id: str | None = None,
        classes: Iterable[str] = (),
    ) -> Iterator[HtmlWriter]:
        """Open ``tag`` for the duration of the block; it is closed on every exit."""
        self.start_tag(tag, id=id, classes=classes)
        try:
            yield self
        finally:
            self.end_tag(tag)

    def heading(self, level: int, text: object) -> None:
        if not MIN_HEADING_LEVEL <= level <= MAX_HEADING_LEVEL:
            raise ValueError(f"Heading level must be between 1 and 6, got {level}")
        with self.element(f"h{level}"):
            self.text(text)
