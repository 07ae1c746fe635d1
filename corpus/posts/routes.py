"""Read-only HTTP index over the post corpus."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel

from corpus.config import Settings, load_settings

from .checks import check_corpus
from .repository import PostRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


class PostSummary(BaseModel):
    key: Optional[str] = None
    date: Optional[str] = None
    slug: Optional[str] = None
    url: Optional[str] = None
    layout: str
    title: str
    path: str
    summary: str


class PostDetail(PostSummary):
    body: str


class PostListResponse(BaseModel):
    posts: List[PostSummary]
    failures: List[Dict[str, str]]


def _settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = load_settings()
        request.app.state.settings = settings
    return settings


def _repository(request: Request) -> PostRepository:
    repository = getattr(request.app.state, "post_repository", None)
    if repository is None:
        settings = _settings(request)
        repository = PostRepository(settings.posts_dir, settings.extensions)
        request.app.state.post_repository = repository
    return repository


@router.get("", response_model=PostListResponse)
def list_posts(request: Request, reload: bool = False) -> PostListResponse:
    repository = _repository(request)
    if reload:
        logger.info("Reloading posts from %s", repository.root)
        repository.reload()
    return PostListResponse(
        posts=[PostSummary(**post.to_summary()) for post in repository.all()],
        failures=[
            {"path": failure.path.as_posix(), "error": failure.error}
            for failure in repository.failures
        ],
    )


@router.get("/check")
def check_posts(request: Request) -> Dict[str, Any]:
    settings = _settings(request)
    return check_corpus(settings.posts_dir, settings).to_dict()


@router.get("/{key}", response_model=PostDetail)
def get_post(request: Request, key: str) -> PostDetail:
    post = _repository(request).get(key)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return PostDetail(**post.to_summary(), body=post.body)
