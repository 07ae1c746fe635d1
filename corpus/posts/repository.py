"""Discovery and in-memory loading of the post corpus."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from corpus.config import DEFAULT_EXTENSIONS
from corpus.errors import CorpusError

from .frontmatter import load_post
from .models import Post

logger = logging.getLogger(__name__)


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def discover_post_files(root: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> List[Path]:
    """Return post files below ``root`` in a stable order."""

    root = Path(root)
    if not root.is_dir():
        logger.warning("Posts directory %s does not exist", root)
        return []

    allowed = {ext.lower() for ext in extensions}
    files = []
    for candidate in root.rglob("*"):
        if not candidate.is_file() or _is_hidden(candidate, root):
            continue
        if candidate.name.endswith("~"):
            continue
        if candidate.suffix.lower() in allowed:
            files.append(candidate)
    return sorted(files)


@dataclass(frozen=True)
class LoadFailure:
    path: Path
    error: str


def _sort_key(post: Post):
    # Newest first; posts without an identity go last.
    if post.identity is None:
        return (1, 0, post.path.as_posix())
    return (0, -post.identity.date.toordinal(), post.path.as_posix())


class PostRepository:
    """Loads every post under ``root`` and serves them from memory."""

    def __init__(self, root: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> None:
        self.root = Path(root)
        self.extensions = tuple(extensions)
        self._posts: List[Post] = []
        self._by_key: Dict[str, Post] = {}
        self._failures: List[LoadFailure] = []
        self._loaded = False

    def load(self) -> None:
        posts: List[Post] = []
        failures: List[LoadFailure] = []
        for path in discover_post_files(self.root, self.extensions):
            try:
                posts.append(load_post(path, extensions=self.extensions))
            except (CorpusError, OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping %s: %s", path, exc)
                failures.append(LoadFailure(path=path, error=str(exc)))

        posts.sort(key=_sort_key)
        by_key: Dict[str, Post] = {}
        for post in posts:
            if post.identity is None:
                continue
            if post.identity.key in by_key:
                logger.warning(
                    "Duplicate post identity %s (%s and %s)",
                    post.identity.key,
                    by_key[post.identity.key].path,
                    post.path,
                )
                continue
            by_key[post.identity.key] = post

        self._posts = posts
        self._by_key = by_key
        self._failures = failures
        self._loaded = True
        logger.info("Loaded %d posts from %s (%d failures)", len(posts), self.root, len(failures))

    def reload(self) -> None:
        self._posts = []
        self._by_key = {}
        self._failures = []
        self._loaded = False
        self.load()

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def all(self) -> List[Post]:
        self._ensure_loaded()
        return list(self._posts)

    def get(self, key: str) -> Optional[Post]:
        self._ensure_loaded()
        return self._by_key.get(key.lower())

    @property
    def failures(self) -> List[LoadFailure]:
        self._ensure_loaded()
        return list(self._failures)


__all__ = ["LoadFailure", "PostRepository", "discover_post_files"]
