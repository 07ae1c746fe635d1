"""Build and runtime metadata served from ``/version``."""

from __future__ import annotations

import os
import platform
from typing import Dict


def _env(name: str) -> str:
    return os.getenv(name, "").strip()


def load_version() -> Dict[str, str]:
    """Read ``GIT_SHA``, ``BUILD_TIME`` and ``PYTHON_VERSION`` set by the deploy."""

    return {
        "git_sha": _env("GIT_SHA") or "unknown",
        "build_time": _env("BUILD_TIME") or "unknown",
        "python": _env("PYTHON_VERSION") or platform.python_version(),
    }


__all__ = ["load_version"]
