import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from corpus.config import Settings


def write_post_file(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    return path


@pytest.fixture()
def make_post():
    return write_post_file


@pytest.fixture()
def posts_dir(tmp_path: Path) -> Path:
    root = tmp_path / "_posts"
    root.mkdir()
    write_post_file(
        root,
        "2021-03-14-cross-compiling-for-arm.md",
        "---\nlayout: post\ntitle: Cross-compiling for ARM\n---\n\nSetting up the toolchain.\n",
    )
    write_post_file(
        root,
        "2022-01-09-state-machines-in-rust.md",
        "---\nlayout: post\ntitle: \"State machines in Rust\"\n---\n"
        "The code lives in [another repo](https://example.com/repo).\n\n"
        "![diagram](/assets/images/fsm.png)\n",
    )
    return root


@pytest.fixture()
def settings(posts_dir: Path) -> Settings:
    return Settings(posts_dir=posts_dir)


@pytest.fixture()
def client(settings: Settings):
    """Provide a FastAPI TestClient wired to the temporary corpus."""

    from fastapi.testclient import TestClient

    from corpus.main import app

    app.state.settings = settings
    app.state.post_repository = None
    try:
        yield TestClient(app)
    finally:
        app.state.settings = None
        app.state.post_repository = None
