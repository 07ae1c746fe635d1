"""Helpers for creating new post files with valid front matter."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from .frontmatter import dump_front_matter
from .naming import post_filename

logger = logging.getLogger(__name__)


def render_post_source(layout: str, title: str, body: str = "") -> str:
    """Render the full source of a post: front matter, blank line, body."""

    if not layout.strip():
        raise ValueError("Layout must not be empty")
    if not title.strip():
        raise ValueError("Title must not be empty")

    header = dump_front_matter(layout.strip(), title.strip())
    text = body.strip()
    return f"---\n{header}---\n\n{text}\n" if text else f"---\n{header}---\n"


def ensure_post_path(posts_dir: Path, filename: str) -> Path:
    """Return the destination for ``filename`` ensuring it stays inside ``posts_dir``."""

    base = Path(posts_dir).resolve()
    target = (base / filename).resolve()
    if base != target.parent and base not in target.parents:
        raise ValueError(f"Post path {filename} escapes {posts_dir}")
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


def write_post(
    posts_dir: Path,
    title: str,
    layout: str,
    published: Optional[date] = None,
    body: str = "",
    ext: str = ".md",
    overwrite: bool = False,
    extensions: Optional[Iterable[str]] = None,
) -> Path:
    published = published or date.today()
    filename = post_filename(published, title, ext, extensions)
    path = ensure_post_path(posts_dir, filename)

    if path.exists() and not overwrite:
        raise FileExistsError(f"{path} already exists; pass overwrite to replace it")

    source = render_post_source(layout, title, body)
    with path.open("w", encoding="utf-8", newline="\n") as fp:
        fp.write(source)
    logger.info("Wrote post %s", path)
    return path


__all__ = ["ensure_post_path", "render_post_source", "write_post"]
