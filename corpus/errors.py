"""Exceptions raised while reading the post corpus."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class CorpusError(ValueError):
    """Base class for corpus problems tied to a single file."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class FrontMatterError(CorpusError):
    """The front-matter block is missing, unterminated or invalid."""


class PostNameError(CorpusError):
    """A post filename does not follow ``YYYY-MM-DD-slug.ext``."""
