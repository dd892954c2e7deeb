"""FastAPI application."""

from fastapi import FastAPI

from server.routers import render
from server.server_config import APP_TITLE

app = FastAPI(title=APP_TITLE)
app.include_router(render.router)


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}
