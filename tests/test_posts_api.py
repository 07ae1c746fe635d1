import inspect

from corpus.posts import routes


def test_list_posts(client):
    response = client.get("/api/v1/posts")
    assert response.status_code == 200
    data = response.json()
    assert [post["key"] for post in data["posts"]] == [
        "2022-01-09-state-machines-in-rust",
        "2021-03-14-cross-compiling-for-arm",
    ]
    assert data["posts"][0]["url"] == "/2022/01/09/state-machines-in-rust/"
    assert "body" not in data["posts"][0]
    assert data["failures"] == []


def test_get_post_includes_body(client):
    response = client.get("/api/v1/posts/2021-03-14-cross-compiling-for-arm")
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Cross-compiling for ARM"
    assert data["layout"] == "post"
    assert data["body"] == "\nSetting up the toolchain.\n"


def test_unknown_post_is_404(client):
    response = client.get("/api/v1/posts/1999-01-01-nothing")
    assert response.status_code == 404
    assert response.json() == {"detail": "Post not found"}


def test_reload_reflects_new_files(client, posts_dir, make_post):
    assert len(client.get("/api/v1/posts").json()["posts"]) == 2
    make_post(posts_dir, "2024-01-01-later.md", "---\nlayout: post\ntitle: Later\n---\n")
    make_post(posts_dir, "2024-01-02-bad.md", "oops\n")

    data = client.get("/api/v1/posts", params={"reload": "true"}).json()

    assert data["posts"][0]["title"] == "Later"
    assert [failure["path"].rsplit("/", 1)[-1] for failure in data["failures"]] == ["2024-01-02-bad.md"]


def test_check_endpoint(client, posts_dir, make_post):
    assert client.get("/api/v1/posts/check").json()["ok"] is True

    make_post(posts_dir, "2024-01-01-untitled.md", "---\nlayout: post\ntitle: ''\n---\n")
    data = client.get("/api/v1/posts/check").json()
    assert data["ok"] is False
    assert [issue["code"] for issue in data["issues"]] == ["empty-title"]


def test_file_reading_handlers_run_in_threadpool():
    for handler in (routes.list_posts, routes.get_post, routes.check_posts):
        assert not inspect.iscoroutinefunction(handler)


def test_check_endpoint_reports_missing_directory(client, settings, tmp_path):
    client.app.state.settings = settings.with_overrides(posts_dir=tmp_path / "gone")

    data = client.get("/api/v1/posts/check").json()

    assert data["ok"] is False
    assert [issue["code"] for issue in data["issues"]] == ["read"]
