"""Command line utility for checking, listing and creating blog posts."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Sequence

from corpus.config import Settings, load_settings
from corpus.posts import PostRepository, check_corpus, post_filename, write_post

LOGGER = logging.getLogger("post_tool")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc


def _add_common_arguments(parser: argparse.ArgumentParser, default) -> None:
    parser.add_argument(
        "--log-level",
        default=default,
        help="Logging level (defaults to LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--posts",
        type=Path,
        default=default,
        help="Posts directory (defaults to POSTS_DIR or _posts)",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check and manage the blog post corpus")
    _add_common_arguments(parser, None)

    # Subcommands accept the same options; SUPPRESS keeps a value given before the
    # subcommand from being reset by the subparser default.
    common = argparse.ArgumentParser(add_help=False)
    _add_common_arguments(common, argparse.SUPPRESS)

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser(
        "check", parents=[common], help="Validate front matter, filenames and identities"
    )
    check.add_argument(
        "--layout",
        action="append",
        dest="layouts",
        default=None,
        help="Allowed layout name; repeat for several (defaults to POST_LAYOUTS)",
    )
    check.add_argument("--json", action="store_true", help="Print the report as JSON")

    listing = subparsers.add_parser("list", parents=[common], help="List posts newest first")
    listing.add_argument("--json", action="store_true", help="Print post summaries as JSON")

    new = subparsers.add_parser("new", parents=[common], help="Create a new post with front matter")
    new.add_argument("--title", required=True, help="Post title")
    new.add_argument("--layout", default="post", help="Layout name for the post")
    new.add_argument("--date", type=_parse_date, default=None, help="Publication date (YYYY-MM-DD)")
    new.add_argument("--ext", default=".md", help="File extension for the post")
    new.add_argument("--body", default="", help="Initial body text")
    new.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace the post if a file with the same name already exists",
    )
    new.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the target path without writing files",
    )
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    return load_settings().with_overrides(
        posts_dir=args.posts,
        layouts=getattr(args, "layouts", None),
        log_level=args.log_level,
    )


def run_check(settings: Settings, as_json: bool) -> int:
    report = check_corpus(settings.posts_dir, settings)
    if as_json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        for issue in report.issues:
            print(issue)
        print(
            f"{report.files_checked} files checked, "
            f"{len(report.errors)} errors, {len(report.warnings)} warnings"
        )
    return 0 if report.ok else 1


def run_list(settings: Settings, as_json: bool) -> int:
    repository = PostRepository(settings.posts_dir, settings.extensions)
    posts = repository.all()
    if as_json:
        print(json.dumps([post.to_summary() for post in posts], indent=2, ensure_ascii=False))
    else:
        for post in posts:
            key = post.identity.key if post.identity else post.path.name
            print(f"{key}  {post.layout}  {post.title}")
    for failure in repository.failures:
        LOGGER.warning("Could not load %s: %s", failure.path, failure.error)
    return 0


def run_new(settings: Settings, args: argparse.Namespace) -> int:
    try:
        if args.dry_run:
            filename = post_filename(
                args.date or date.today(), args.title, args.ext, settings.extensions
            )
            print(f"[dry-run] Would write post to {settings.posts_dir / filename}")
            return 0
        path = write_post(
            settings.posts_dir,
            title=args.title,
            layout=args.layout,
            published=args.date,
            body=args.body,
            ext=args.ext,
            overwrite=args.overwrite,
            extensions=settings.extensions,
        )
    except (FileExistsError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 1
    print(f"Created post at {path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = _settings_from_args(args)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")

    if args.command == "check":
        return run_check(settings, args.json)
    if args.command == "list":
        return run_list(settings, args.json)
    return run_new(settings, args)


if __name__ == "__main__":
    sys.exit(main())
