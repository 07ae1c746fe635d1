"""Typed representations of posts and their front matter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

SUMMARY_LENGTH = 160


class FrontMatter(BaseModel):
    """The header block of a post: exactly a layout and a title."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    layout: str
    title: str

    @field_validator("layout", "title", mode="before")
    @classmethod
    def _scalar_to_text(cls, value: Any) -> Any:
        # YAML turns titles such as ``1984`` or ``true`` into non-strings.
        if isinstance(value, (bool, int, float, date)):
            return str(value)
        return value

    @field_validator("layout", "title")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value


@dataclass(frozen=True, order=True)
class PostIdentity:
    """Publication date and slug derived from a post filename."""

    date: date
    slug: str

    @property
    def key(self) -> str:
        return f"{self.date.isoformat()}-{self.slug}"

    @property
    def url_path(self) -> str:
        return f"/{self.date:%Y/%m/%d}/{self.slug}/"


@dataclass
class Post:
    path: Path
    front_matter: FrontMatter
    body: str
    identity: Optional[PostIdentity] = None

    @property
    def layout(self) -> str:
        return self.front_matter.layout

    @property
    def title(self) -> str:
        return self.front_matter.title

    def summary(self) -> str:
        collapsed = " ".join(self.body.split())
        if len(collapsed) > SUMMARY_LENGTH:
            return collapsed[: SUMMARY_LENGTH - 3] + "…"
        return collapsed

    def to_summary(self) -> Dict[str, Any]:
        identity = self.identity
        return {
            "key": identity.key if identity else None,
            "date": identity.date.isoformat() if identity else None,
            "slug": identity.slug if identity else None,
            "url": identity.url_path if identity else None,
            "layout": self.layout,
            "title": self.title,
            "path": self.path.as_posix(),
            "summary": self.summary(),
        }


__all__ = ["FrontMatter", "Post", "PostIdentity"]
