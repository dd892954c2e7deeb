"""Process a render request into HTML."""

from __future__ import annotations

from fastapi import status

from sectionhtml.exceptions import DepthExceededError, DocumentError, RenderingError, SkipPageError
from sectionhtml.html_parser import parse_document_html
from sectionhtml.page_renderer import render_document
from sectionhtml.request_scope import RequestScope
from sectionhtml.section_renderer import TOC_DONE_PER_PAGE_ATTRIBUTE
from sectionhtml.utils.logging_config import get_logger
from server.models import RenderErrorResponse, RenderRequest, RenderResponse, RenderSuccessResponse

logger = get_logger(__name__)


def process_render(render_request: RenderRequest, *, scope: RequestScope) -> tuple[int, RenderResponse | None]:
    """Render the requested pages within ``scope``.

    Returns
    -------
    tuple[int, RenderResponse | None]
        HTTP status code and response body; no body when rendering was skipped.

    """
    try:
        if render_request.document is not None:
            pages = render_request.document.to_pages()
        else:
            pages = [parse_document_html(render_request.html or "", path=render_request.path)]
    except DocumentError as exc:
        logger.warning("Invalid document", extra={"error": str(exc)})
        return status.HTTP_400_BAD_REQUEST, RenderErrorResponse(error=str(exc))

    try:
        html = render_document(pages, scope=scope)
    except SkipPageError:
        logger.info("Rendering skipped", extra={"pages": len(pages)})
        return status.HTTP_204_NO_CONTENT, None
    except DepthExceededError as exc:
        _log_error(pages, exc)
        return status.HTTP_422_UNPROCESSABLE_ENTITY, RenderErrorResponse(error=str(exc))
    except RenderingError as exc:
        _log_error(pages, exc)
        return status.HTTP_500_INTERNAL_SERVER_ERROR, RenderErrorResponse(error=str(exc))

    toc_done_per_page = scope.attribute(TOC_DONE_PER_PAGE_ATTRIBUTE).get()
    toc_pages = len(toc_done_per_page) if toc_done_per_page is not None else 0
    logger.info(
        "Render completed successfully",
        extra={"pages": len(pages), "toc_pages": toc_pages, "html_chars": len(html)},
    )
    return status.HTTP_200_OK, RenderSuccessResponse(html=html, pages=len(pages), toc_pages=toc_pages)


def _log_error(pages: list, exc: Exception) -> None:
    logger.error(
        "Render failed",
        extra={"titles": [page.title for page in pages], "error": str(exc)},
    )
