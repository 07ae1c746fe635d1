"""Splitting, joining and parsing of front-matter blocks.

A post file starts with a ``---`` line, carries a YAML header and closes the
header with another ``---`` (or ``...``) line; everything after the closing
line is the body. :func:`split_document` keeps the delimiter lines verbatim so
that :func:`join_document` reproduces the original text exactly, CRLF line
endings and a leading byte-order mark included.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml
from pydantic import ValidationError

from corpus.errors import FrontMatterError, PostNameError

from .models import FrontMatter, Post
from .naming import parse_post_filename

logger = logging.getLogger(__name__)

_OPENING = re.compile(r"\A\ufeff?---[ \t]*(?:\r\n|\n)")
_CLOSING = re.compile(r"^(?:---|\.\.\.)[ \t]*(?:\r\n|\n|\Z)", re.MULTILINE)


@dataclass(frozen=True)
class Document:
    """Raw pieces of a post file."""

    opening: str
    header: str
    closing: str
    body: str


def split_document(text: str, path: Optional[Path] = None) -> Document:
    opening = _OPENING.match(text)
    if opening is None:
        raise FrontMatterError("file does not start with a '---' front-matter line", path)

    closing = _CLOSING.search(text, opening.end())
    if closing is None:
        raise FrontMatterError("front-matter block is never closed", path)

    return Document(
        opening=opening.group(0),
        header=text[opening.end() : closing.start()],
        closing=closing.group(0),
        body=text[closing.end() :],
    )


def join_document(document: Document) -> str:
    return document.opening + document.header + document.closing + document.body


def parse_front_matter(header: str, path: Optional[Path] = None) -> Dict[str, Any]:
    """Parse the YAML header into a mapping."""

    if not header.strip():
        return {}
    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"front matter is not valid YAML: {exc}", path) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front matter must be a mapping, got {type(data).__name__}", path
        )
    return data


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "front matter"
        if error.get("type") == "extra_forbidden":
            problems.append(f"unexpected field '{field}'")
        elif error.get("type") == "missing":
            problems.append(f"missing field '{field}'")
        else:
            problems.append(f"{field}: {error.get('msg')}")
    return "; ".join(problems)


def validate_front_matter(data: Dict[str, Any], path: Optional[Path] = None) -> FrontMatter:
    try:
        return FrontMatter.model_validate(data)
    except ValidationError as exc:
        raise FrontMatterError(_describe_validation_error(exc), path) from exc


def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8 without newline translation."""

    return path.read_bytes().decode("utf-8")


def load_post(
    path: Path, text: Optional[str] = None, extensions: Optional[Iterable[str]] = None
) -> Post:
    """Load a post from ``path`` (or from ``text`` when already read)."""

    path = Path(path)
    if text is None:
        text = read_text(path)
    document = split_document(text, path)
    front_matter = validate_front_matter(parse_front_matter(document.header, path), path)

    try:
        identity = parse_post_filename(path.name, extensions)
    except PostNameError:
        logger.debug("No identity for %s; filename does not follow the convention", path)
        identity = None

    return Post(path=path, front_matter=front_matter, body=document.body, identity=identity)


def dump_front_matter(layout: str, title: str) -> str:
    return yaml.safe_dump(
        {"layout": layout, "title": title},
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=1_000_000,
    )


__all__ = [
    "Document",
    "dump_front_matter",
    "join_document",
    "load_post",
    "parse_front_matter",
    "read_text",
    "split_document",
    "validate_front_matter",
]
