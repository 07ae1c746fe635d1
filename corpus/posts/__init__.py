"""Post parsing, identity, checks and scaffolding."""

from .checks import CheckReport, Issue, check_corpus, check_file
from .frontmatter import Document, join_document, load_post, parse_front_matter, split_document
from .models import FrontMatter, Post, PostIdentity
from .naming import parse_post_filename, post_filename, slugify
from .repository import LoadFailure, PostRepository, discover_post_files
from .scaffold import render_post_source, write_post

__all__ = [
    "CheckReport",
    "Document",
    "FrontMatter",
    "Issue",
    "LoadFailure",
    "Post",
    "PostIdentity",
    "PostRepository",
    "check_corpus",
    "check_file",
    "discover_post_files",
    "join_document",
    "load_post",
    "parse_front_matter",
    "parse_post_filename",
    "post_filename",
    "render_post_source",
    "slugify",
    "split_document",
    "write_post",
]
