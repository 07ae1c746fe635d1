"""Post identity derived from the ``YYYY-MM-DD-slug.ext`` filename convention."""

from __future__ import annotations

import re
import unicodedata
from datetime import date
from pathlib import PurePath
from typing import Iterable, Optional, Union

from corpus.config import DEFAULT_EXTENSIONS
from corpus.errors import PostNameError

from .models import PostIdentity

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
_FILENAME_PATTERN = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)$")


def slugify(value: str) -> str:
    """Convert a title to a URL-friendly slug."""

    folded = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    cleaned = re.sub(r"[^a-zA-Z0-9\s_-]", "", folded).lower()
    cleaned = re.sub(r"[\s_-]+", "-", cleaned).strip("-")
    if not cleaned:
        raise ValueError(f"Unable to build slug from title {value!r}")
    return cleaned


def parse_post_filename(
    name: Union[str, PurePath], extensions: Optional[Iterable[str]] = None
) -> PostIdentity:
    """Return the identity encoded in ``name`` or raise :class:`PostNameError`."""

    path = PurePath(name)
    allowed = tuple(ext.lower() for ext in (extensions or DEFAULT_EXTENSIONS))
    suffix = path.suffix.lower()
    if suffix not in allowed:
        raise PostNameError(
            f"extension {suffix or '(none)'} is not one of {', '.join(allowed)}", path
        )

    match = _FILENAME_PATTERN.match(path.stem)
    if match is None:
        raise PostNameError("filename must look like YYYY-MM-DD-slug", path)

    try:
        published = date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError as exc:
        raise PostNameError(f"invalid publication date: {exc}", path) from exc

    slug = match["slug"].lower()
    if not SLUG_PATTERN.fullmatch(slug):
        raise PostNameError(
            f"slug {match['slug']!r} must be lowercase words joined by single hyphens", path
        )
    return PostIdentity(date=published, slug=slug)


def post_filename(
    published: date, title: str, ext: str = ".md", extensions: Optional[Iterable[str]] = None
) -> str:
    ext = ext.strip().lower()
    if not ext.startswith("."):
        ext = f".{ext}"
    allowed = tuple(value.lower() for value in (extensions or DEFAULT_EXTENSIONS))
    if ext not in allowed:
        raise ValueError(f"Extension {ext} is not one of {', '.join(allowed)}")
    return f"{published.isoformat()}-{slugify(title)}{ext}"


__all__ = ["SLUG_PATTERN", "parse_post_filename", "post_filename", "slugify"]
