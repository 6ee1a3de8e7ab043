import datetime as dt

import pytest

from conftest import write_post
from quizblog.content.store import PostNotFound, PostStore, extract_links, split_frontmatter


def test_slugs_include_nested(posts_dir):
    assert PostStore(posts_dir).all_slugs() == ["Glossary", "Page 1", "Page 2", "notes/deep"]


def test_frontmatter_fields(posts_dir):
    post = PostStore(posts_dir).get_post("Page 2")
    assert post.title == "Page 2"
    assert post.excerpt == "Second page"
    assert post.date == dt.date(2024, 1, 2)
    assert post.content.startswith("Back to [[Page 1]]")


def test_title_and_excerpt_fallbacks(posts_dir):
    post = PostStore(posts_dir).get_post("Glossary")
    assert post.title == "Glossary"
    # heading skipped, wikilink brackets dropped
    assert post.excerpt == "Terms used across Page 1 and Page 1#intro."


def test_long_excerpt_is_truncated(tmp_path):
    write_post(tmp_path, "long", "word " * 100)
    excerpt = PostStore(tmp_path).get_post("long").excerpt
    assert excerpt.endswith("...")
    assert len(excerpt) <= 203


def test_links_mapping_ordered_and_deduplicated(posts_dir):
    mapping = PostStore(posts_dir).get_links_mapping()
    assert mapping["Page 1"] == ["Page 2", "Glossary"]
    assert mapping["Page 2"] == ["Page 1", "Page 2", "Missing"]
    assert mapping["Glossary"] == ["Page 1"]
    assert mapping["notes/deep"] == ["Page 2"]


def test_get_post_by_slug_selects_fields(posts_dir):
    data = PostStore(posts_dir).get_post_by_slug("Page 1", ["title", "excerpt"])
    assert data == {"title": "Page 1", "excerpt": "First page"}


def test_get_all_posts_newest_first(posts_dir):
    slugs = [p["slug"] for p in PostStore(posts_dir).get_all_posts(["slug"])]
    assert slugs[:2] == ["Page 2", "Page 1"]
    assert set(slugs) == {"Glossary", "Page 1", "Page 2", "notes/deep"}


def test_missing_post_raises(posts_dir):
    store = PostStore(posts_dir)
    assert not store.has_post("Missing")
    with pytest.raises(PostNotFound):
        store.get_post("Missing")


def test_author_and_image_shorthand(tmp_path):
    write_post(tmp_path, "p", "body", title="P", author="Ada", ogImage="https://img/x.png")
    post = PostStore(tmp_path).get_post("p")
    assert post.author.name == "Ada"
    assert post.ogImage.url == "https://img/x.png"


def test_split_frontmatter_without_header():
    assert split_frontmatter("just text") == ({}, "just text")


def test_extract_links_aliases_and_headings():
    assert extract_links("[[A|alias]] [[B#sec]] [[A]] [[ ]]") == ["A", "B"]


def test_empty_frontmatter_block(tmp_path):
    (tmp_path / "bare.md").write_text("---\n---\nBody text\n", encoding="utf-8")
    post = PostStore(tmp_path).get_post("bare")
    assert post.content == "Body text\n"
    assert post.excerpt == "Body text"
    assert post.title == "bare"


def test_empty_frontmatter_keeps_later_rules_in_body():
    meta, body = split_frontmatter("---\n---\nIntro\n---\nmore\n")
    assert meta == {}
    assert body == "Intro\n---\nmore\n"
