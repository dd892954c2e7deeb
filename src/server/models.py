"""Pydantic models for the render API."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sectionhtml.schemas import DocumentSpec
from server.server_config import MAX_HTML_CHARS, MAX_PAGES


class RenderRequest(BaseModel):
    """Request model for the /api/render endpoint.

    Attributes
    ----------
    document : DocumentSpec | None
        Structured document with one or more pages.
    html : str | None
        HTML source of a single page, used when ``document`` is not given.
    path : str | None
        Path recorded on the page parsed from ``html``.

    """

    model_config = ConfigDict(extra="forbid")

    document: DocumentSpec | None = Field(default=None, description="Structured document to render")
    html: str | None = Field(default=None, max_length=MAX_HTML_CHARS, description="HTML source of a single page")
    path: str | None = Field(default=None, description="Path of the page parsed from html")

    @model_validator(mode="after")
    def exactly_one_source(self) -> RenderRequest:
        """Require either ``document`` or ``html``, not both."""
        if (self.document is None) == (self.html is None):
            err = "Provide exactly one of document or html"
            raise ValueError(err)
        if self.document is not None and len(self.document.pages) > MAX_PAGES:
            err = f"At most {MAX_PAGES} pages can be rendered at once"
            raise ValueError(err)
        return self


class RenderSuccessResponse(BaseModel):
    """Success response model for the /api/render endpoint.

    Attributes
    ----------
    html : str
        Rendered HTML.
    pages : int
        Number of pages rendered.
    toc_pages : int
        Number of pages for which the table of contents was included.

    """

    html: str = Field(..., description="Rendered HTML")
    pages: int = Field(..., description="Number of pages rendered")
    toc_pages: int = Field(..., description="Pages that included the table of contents")


class RenderErrorResponse(BaseModel):
    """Error response model for the /api/render endpoint."""

    error: str = Field(..., description="Error message")


RenderResponse = Union[RenderSuccessResponse, RenderErrorResponse]
