# quizblog/content/store.py
from __future__ import annotations
import datetime as dt
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from .models import Post

log = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r"\A---[ \t]*\n(?:(.*?)\n)??---[ \t]*(?:\n|\Z)", re.S)
WIKILINK_RE = re.compile(r"\[\[([^\[\]]+?)\]\]")
EXCERPT_CHARS = 200


class PostNotFound(KeyError):
    pass


def split_frontmatter(text: str) -> tuple[Dict[str, Any], str]:
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    meta = yaml.safe_load(m.group(1) or "") or {}
    if not isinstance(meta, dict):
        meta = {}
    return meta, text[m.end():]


def wikilink_target(inner: str) -> str:
    """`Target|label` and `Target#heading` both point at `Target`."""
    target = inner.split("|", 1)[0].split("#", 1)[0]
    return target.strip()


def extract_links(content: str) -> List[str]:
    seen = set()
    out = []
    for m in WIKILINK_RE.finditer(content or ""):
        target = wikilink_target(m.group(1))
        if target and target not in seen:
            seen.add(target)
            out.append(target)
    return out


def _first_paragraph(body: str) -> str:
    for block in re.split(r"\n\s*\n", body.strip()):
        block = block.strip()
        if not block or block.startswith("#"):
            continue
        text = WIKILINK_RE.sub(lambda m: m.group(1).split("|")[-1], " ".join(block.split()))
        if len(text) > EXCERPT_CHARS:
            return text[:EXCERPT_CHARS].rstrip() + "..."
        return text
    return ""


class PostStore:
    """Markdown-on-disk content store; one file per post, slug = relative path without `.md`."""

    def __init__(self, posts_dir):
        self.posts_dir = Path(posts_dir)
        self._cache: Dict[str, Post] = {}

    def _path_for(self, slug: str) -> Path:
        return self.posts_dir / f"{slug}.md"

    def all_slugs(self) -> List[str]:
        if not self.posts_dir.exists():
            log.warning("Posts directory not found: %s", self.posts_dir)
            return []
        return sorted(
            p.relative_to(self.posts_dir).with_suffix("").as_posix()
            for p in self.posts_dir.rglob("*.md")
        )

    def has_post(self, slug: str) -> bool:
        return slug in self._cache or self._path_for(slug).is_file()

    def get_post(self, slug: str) -> Post:
        if slug in self._cache:
            return self._cache[slug]
        path = self._path_for(slug)
        if not path.is_file():
            raise PostNotFound(slug)

        meta, body = split_frontmatter(path.read_text(encoding="utf-8"))
        author = meta.get("author")
        if isinstance(author, str):
            author = {"name": author}
        post_date = meta.get("date")
        if isinstance(post_date, dt.datetime):
            post_date = post_date.date()
        elif post_date is not None and not isinstance(post_date, dt.date):
            post_date = str(post_date)
        og = meta.get("ogImage") or meta.get("og_image")
        if isinstance(og, str):
            og = {"url": og}

        post = Post(
            slug=slug,
            title=str(meta.get("title") or slug.rsplit("/", 1)[-1]),
            excerpt=str(meta.get("excerpt") or _first_paragraph(body)),
            date=post_date,
            author=author,
            content=body,
            ogImage=og,
            links=extract_links(body),
        )
        self._cache[slug] = post
        return post

    def get_post_by_slug(self, slug: str, fields: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """Only the requested fields, e.g. ["title", "excerpt"] for backlink cards."""
        data = self.get_post(slug).model_dump()
        if fields is None:
            return data
        return {f: data[f] for f in fields if f in data}

    def get_all_posts(self, fields: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        fields = list(fields) if fields is not None else None
        posts = [self.get_post(s) for s in self.all_slugs()]
        # newest first; undated posts last
        posts.sort(key=lambda p: str(p.date or ""), reverse=True)
        return [self.get_post_by_slug(p.slug, fields) for p in posts]

    def get_links_mapping(self) -> Dict[str, List[str]]:
        return {s: list(self.get_post(s).links) for s in self.all_slugs()}
