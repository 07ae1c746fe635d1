"""Environment-driven settings for the corpus tools."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Tuple

DEFAULT_POSTS_DIR = "_posts"
DEFAULT_EXTENSIONS = (".md", ".markdown", ".html")


def _split_list(raw: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _normalise_extensions(values: Iterable[str]) -> Tuple[str, ...]:
    normalised = []
    for value in values:
        ext = value.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        if ext not in normalised:
            normalised.append(ext)
    return tuple(normalised)


@dataclass(frozen=True)
class Settings:
    posts_dir: Path = Path(DEFAULT_POSTS_DIR)
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    layouts: Tuple[str, ...] = ()
    log_level: str = "INFO"

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        if "posts_dir" in changes:
            changes["posts_dir"] = Path(changes["posts_dir"])
        if "extensions" in changes:
            changes["extensions"] = _normalise_extensions(changes["extensions"])
        if "layouts" in changes:
            changes["layouts"] = tuple(changes["layouts"])
        if "log_level" in changes:
            changes["log_level"] = str(changes["log_level"]).upper()
        return replace(self, **changes)


def _posts_dir() -> Path:
    value = os.getenv("POSTS_DIR", "").strip()
    return Path(value or DEFAULT_POSTS_DIR)


def _extensions() -> Tuple[str, ...]:
    raw = os.getenv("POST_EXTENSIONS", "")
    values = _normalise_extensions(_split_list(raw))
    return values or DEFAULT_EXTENSIONS


def _layouts() -> Tuple[str, ...]:
    return _split_list(os.getenv("POST_LAYOUTS", ""))


def _log_level() -> str:
    value = os.getenv("LOG_LEVEL", "").strip().upper()
    return value or "INFO"


def load_settings() -> Settings:
    """Build settings from the environment, falling back to defaults."""

    return Settings(
        posts_dir=_posts_dir(),
        extensions=_extensions(),
        layouts=_layouts(),
        log_level=_log_level(),
    )


__all__ = ["DEFAULT_EXTENSIONS", "DEFAULT_POSTS_DIR", "Settings", "load_settings"]
