"""Structural checks over post files and the corpus as a whole."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from corpus.config import Settings
from corpus.errors import FrontMatterError, PostNameError

from .frontmatter import join_document, parse_front_matter, split_document, validate_front_matter
from .models import FrontMatter, PostIdentity
from .naming import parse_post_filename
from .repository import discover_post_files

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"

REQUIRED_FIELDS = tuple(FrontMatter.model_fields)


@dataclass(frozen=True)
class Issue:
    path: Path
    code: str
    message: str
    severity: str = ERROR

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["path"] = self.path.as_posix()
        return data

    def __str__(self) -> str:
        return f"{self.path.as_posix()}: {self.severity}: [{self.code}] {self.message}"


@dataclass
class CheckReport:
    root: Path
    files_checked: int = 0
    issues: List[Issue] = field(default_factory=list)

    @property
    def errors(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity == ERROR]

    @property
    def warnings(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity == WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root.as_posix(),
            "ok": self.ok,
            "files_checked": self.files_checked,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "issues": [issue.to_dict() for issue in self.issues],
        }


def _check_fields(path: Path, data: Dict[str, Any], settings: Settings) -> List[Issue]:
    issues: List[Issue] = []
    keys = {str(key) for key in data}
    missing = [name for name in REQUIRED_FIELDS if name not in keys]
    unexpected = sorted(keys.difference(REQUIRED_FIELDS))
    if missing:
        issues.append(Issue(path, "fields", f"missing field(s): {', '.join(missing)}"))
    if unexpected:
        issues.append(Issue(path, "fields", f"unexpected field(s): {', '.join(unexpected)}"))

    title = data.get("title")
    if "title" in data and (title is None or (isinstance(title, str) and not title.strip())):
        issues.append(Issue(path, "empty-title", "title must not be empty"))

    if issues:
        return issues

    try:
        front_matter = validate_front_matter(data, path)
    except FrontMatterError as exc:
        return [Issue(path, "fields", exc.message)]

    if settings.layouts and front_matter.layout not in settings.layouts:
        issues.append(
            Issue(
                path,
                "unknown-layout",
                f"layout '{front_matter.layout}' is not one of {', '.join(settings.layouts)}",
                WARNING,
            )
        )
    return issues


def check_file(path: Path, settings: Settings) -> List[Issue]:
    """Run every per-file check against ``path``."""

    path = Path(path)
    issues: List[Issue] = []

    try:
        parse_post_filename(path.name, settings.extensions)
    except PostNameError as exc:
        issues.append(Issue(path, "filename", exc.message))

    try:
        raw = path.read_bytes()
        text = raw.decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Unable to read %s: %s", path, exc)
        issues.append(Issue(path, "read", f"unable to read file: {exc}"))
        return issues

    try:
        document = split_document(text, path)
        data = parse_front_matter(document.header, path)
    except FrontMatterError as exc:
        issues.append(Issue(path, "front-matter", exc.message))
        return issues

    if join_document(document).encode("utf-8") != raw:
        issues.append(
            Issue(path, "round-trip", "front matter and body do not reassemble into the original file")
        )

    issues.extend(_check_fields(path, data, settings))
    return issues


def _duplicate_issues(identities: Dict[PostIdentity, List[Path]]) -> List[Issue]:
    issues: List[Issue] = []
    for identity, paths in identities.items():
        if len(paths) < 2:
            continue
        for path in paths:
            others = ", ".join(other.as_posix() for other in paths if other != path)
            issues.append(
                Issue(path, "duplicate-identity", f"identity {identity.key} is also used by {others}")
            )
    return issues


def check_corpus(root: Optional[Path], settings: Settings) -> CheckReport:
    """Check every post file below ``root`` (defaults to the configured posts dir)."""

    root = Path(root) if root is not None else settings.posts_dir
    report = CheckReport(root=root)
    identities: Dict[PostIdentity, List[Path]] = defaultdict(list)

    if not root.is_dir():
        logger.error("Posts directory %s does not exist", root)
        report.issues.append(Issue(root, "read", "posts directory does not exist"))
        return report

    for path in discover_post_files(root, settings.extensions):
        report.files_checked += 1
        report.issues.extend(check_file(path, settings))
        try:
            identities[parse_post_filename(path.name, settings.extensions)].append(path)
        except PostNameError:
            continue

    report.issues.extend(_duplicate_issues(identities))
    report.issues.sort(key=lambda issue: (issue.path.as_posix(), issue.code))
    logger.info(
        "Checked %d files in %s: %d errors, %d warnings",
        report.files_checked,
        root,
        len(report.errors),
        len(report.warnings),
    )
    return report


__all__ = ["CheckReport", "ERROR", "Issue", "WARNING", "check_corpus", "check_file"]
