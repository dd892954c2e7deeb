"""Render endpoint for the API."""

from __future__ import annotations

from typing import Iterator

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from sectionhtml.request_scope import RequestScope
from server.models import RenderErrorResponse, RenderRequest, RenderSuccessResponse
from server.render_processor import process_render

router = APIRouter()

RENDER_RESPONSES = {
    200: {"model": RenderSuccessResponse, "description": "Rendered HTML"},
    400: {"model": RenderErrorResponse, "description": "Invalid document"},
    422: {"model": RenderErrorResponse, "description": "Sections nested too deep"},
    500: {"model": RenderErrorResponse, "description": "Rendering failed"},
}


def request_scope() -> Iterator[RequestScope]:
    """One request scope per HTTP request, closed when the request ends."""
    with RequestScope() as scope:
        yield scope


@router.post("/api/render", responses=RENDER_RESPONSES)
def api_render(
    render_request: RenderRequest,
    scope: RequestScope = Depends(request_scope),
) -> Response:
    """Render a document to HTML.

    **Parameters**

    - **render_request** (`RenderRequest`): a structured document or a single page of HTML source

    **Returns**

    - **JSONResponse**: rendered HTML with page counts, or an error message
    - **204 No Content** when rendering was explicitly skipped

    """
    status_code, response = process_render(render_request, scope=scope)
    if response is None:
        return Response(status_code=status_code)
    return JSONResponse(status_code=status_code, content=response.model_dump())
