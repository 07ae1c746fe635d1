"""FastAPI application serving the post corpus index."""

from __future__ import annotations

from fastapi import FastAPI

from corpus.posts.routes import router as posts_router
from corpus.version_info import load_version

VERSION = load_version()

app = FastAPI(title="Post Corpus API")
app.include_router(posts_router)


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
async def version() -> dict[str, str]:
    return VERSION
