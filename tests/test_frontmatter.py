from pathlib import Path

import pytest

from corpus.errors import FrontMatterError
from corpus.posts.frontmatter import (
    dump_front_matter,
    join_document,
    load_post,
    parse_front_matter,
    split_document,
)

SAMPLE = "---\nlayout: post\ntitle: Debugging with OpenOCD\n---\n\n# Notes\n\nBody text.\n"


def test_split_separates_header_and_body():
    document = split_document(SAMPLE)
    assert document.opening == "---\n"
    assert document.header == "layout: post\ntitle: Debugging with OpenOCD\n"
    assert document.closing == "---\n"
    assert document.body == "\n# Notes\n\nBody text.\n"


@pytest.mark.parametrize(
    "text",
    [
        SAMPLE,
        "---\r\nlayout: post\r\ntitle: Windows line endings\r\n---\r\nBody\r\n",
        "\ufeff---\nlayout: post\ntitle: With BOM\n---\nBody",
        "---\nlayout: post\ntitle: Closed with dots\n...\n",
        "---\nlayout: post\ntitle: No body\n---",
        "---\n---\nEmpty header\n",
        "---\nlayout: post\ntitle: Rule in body\n---\ntext\n---\nmore\n",
    ],
)
def test_split_then_join_reproduces_text(text):
    assert join_document(split_document(text)) == text


def test_body_keeps_later_delimiters():
    document = split_document("---\nlayout: post\ntitle: x\n---\na\n---\nb\n")
    assert document.body == "a\n---\nb\n"


@pytest.mark.parametrize(
    "text",
    ["No front matter here\n", "\n---\nlayout: post\n---\n", "---layout: post\n---\n"],
)
def test_missing_opening_delimiter_is_rejected(text):
    with pytest.raises(FrontMatterError, match="does not start"):
        split_document(text)


def test_unterminated_block_is_rejected():
    with pytest.raises(FrontMatterError, match="never closed"):
        split_document("---\nlayout: post\ntitle: Open\n\nbody\n")


def test_parse_front_matter_returns_mapping():
    assert parse_front_matter("layout: post\ntitle: Hello\n") == {"layout": "post", "title": "Hello"}
    assert parse_front_matter("   \n") == {}


def test_parse_front_matter_rejects_invalid_yaml():
    with pytest.raises(FrontMatterError, match="not valid YAML"):
        parse_front_matter("title: [unclosed\n")


def test_parse_front_matter_rejects_non_mapping():
    with pytest.raises(FrontMatterError, match="must be a mapping"):
        parse_front_matter("- layout\n- title\n")


def test_load_post_reads_fields_and_identity(tmp_path: Path):
    path = tmp_path / "2020-05-01-debugging-with-openocd.md"
    path.write_bytes(SAMPLE.encode("utf-8"))

    post = load_post(path)

    assert post.layout == "post"
    assert post.title == "Debugging with OpenOCD"
    assert post.body == "\n# Notes\n\nBody text.\n"
    assert post.identity is not None
    assert post.identity.key == "2020-05-01-debugging-with-openocd"


def test_load_post_without_conventional_name_has_no_identity(tmp_path: Path):
    path = tmp_path / "about.md"
    path.write_bytes(SAMPLE.encode("utf-8"))
    assert load_post(path).identity is None


def test_load_post_reports_extra_and_missing_fields(tmp_path: Path):
    path = tmp_path / "2020-05-01-extra.md"
    path.write_text("---\nlayout: post\ntags: [rust]\n---\nBody\n", encoding="utf-8")

    with pytest.raises(FrontMatterError) as excinfo:
        load_post(path)

    message = str(excinfo.value)
    assert "unexpected field 'tags'" in message
    assert "missing field 'title'" in message
    assert str(path) in message


def test_load_post_rejects_blank_title(tmp_path: Path):
    path = tmp_path / "2020-05-01-blank.md"
    path.write_text("---\nlayout: post\ntitle: '   '\n---\n", encoding="utf-8")
    with pytest.raises(FrontMatterError, match="title"):
        load_post(path)


def test_numeric_title_is_kept_as_text(tmp_path: Path):
    path = tmp_path / "2020-05-01-1984.md"
    path.write_text("---\nlayout: post\ntitle: 1984\n---\n", encoding="utf-8")
    assert load_post(path).title == "1984"


def test_dump_front_matter_round_trips_through_parser():
    header = dump_front_matter("post", "Cross-compiling: the hard way")
    assert header.splitlines()[0].startswith("layout:")
    assert parse_front_matter(header) == {
        "layout": "post",
        "title": "Cross-compiling: the hard way",
    }
