"""FastAPI application entry point for the Resume Canvas API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_canvas.api.routes import health, projects, uploads

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup."""
    from resume_canvas.data.db import init_db

    init_db()
    yield


app = FastAPI(
    title="Resume Canvas API",
    description="Persistence API for resume canvas projects and their images",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(projects.router, prefix="/api")
app.include_router(uploads.router, prefix="/api")


def main(host: str = "0.0.0.0", port: int = 8000, *, reload: bool = False) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run("resume_canvas.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main(reload=True)
