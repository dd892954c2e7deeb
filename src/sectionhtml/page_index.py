"""Page numbering for aggregated multi-page renders."""

from __future__ import annotations

from typing import Iterable

from sectionhtml.model import Page
from sectionhtml.request_scope import IdentityMap


class PageIndex:
    """Numbers pages from 1 by identity so their ids stay unique when combined."""

    def __init__(self, pages: Iterable[Page]) -> None:
        self.pages: list[Page] = []
        self._numbers: IdentityMap[Page, int] = IdentityMap()
        for page in pages:
            if self._numbers.put_if_absent(page, len(self.pages) + 1) is None:
                self.pages.append(page)

    def page_number(self, page: Page) -> int | None:
        return self._numbers.get(page)

    def __len__(self) -> int:
        return len(self.pages)


def qualify_id(page_index: PageIndex | None, page: Page | None, element_id: str | None) -> str | None:
    """Return ``element_id`` made unique across the pages of ``page_index``.

    Without an index, a page, or when the page is not part of the index, the
    id is returned unchanged. An absent id stays absent.
    """
    if element_id is None:
        return None
    if page_index is None or page is None:
        return element_id
    number = page_index.page_number(page)
    if number is None:
        return element_id
    return f"page{number}-{element_id}"
