"""Input schemas for sectionhtml documents."""

from sectionhtml.schemas.document import DocumentSpec, ElementSpec, PageSpec

__all__ = ["DocumentSpec", "ElementSpec", "PageSpec"]
