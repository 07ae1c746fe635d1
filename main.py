"""ASGI entrypoint for the post corpus index."""

from corpus.main import app

__all__ = ["app"]
