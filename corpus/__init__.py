"""Tooling for a static blog post corpus."""

__version__ = "0.1.0"
