# quizblog/content/render.py
import re
from typing import Any, Dict, Iterable, Optional, Tuple
from urllib.parse import quote

import markdown

from .models import Post
from .store import WIKILINK_RE, wikilink_target

MD_EXTENSIONS = ["extra", "sane_lists"]
DESCRIPTION_CHARS = 155
DEFAULT_IMAGE_SIZE = 512
_PAGE_NUM_RE = re.compile(r"^[+-]?\d+")


def post_url(slug: str) -> str:
    return "/" + quote(slug) + "/"


def sanitize_content(text: str) -> str:
    """Drop leftover [[ ]] around wikilinks nothing resolved."""
    return WIKILINK_RE.sub(r"\1", text or "")


def _link_wikilinks(content: str, known: set) -> str:
    def sub(m):
        inner = m.group(1)
        target = wikilink_target(inner)
        label = inner.split("|", 1)[1].strip() if "|" in inner else inner.strip()
        if target in known:
            return f"[{label}]({post_url(target)})"
        return m.group(0)
    return WIKILINK_RE.sub(sub, content)


def markdown_to_html(content: str, slug: str, known_slugs: Optional[Iterable[str]] = None) -> str:
    known = set(known_slugs or ())
    known.discard(slug)
    text = _link_wikilinks(content or "", known)
    html = markdown.markdown(text, extensions=MD_EXTENSIONS, output_format="html")
    return sanitize_content(html)


def page_number(title: str) -> Optional[int]:
    # "Page 12" style titles; the second word decides
    words = (title or "").split(" ")
    if len(words) < 2:
        return None
    m = _PAGE_NUM_RE.match(words[1])
    return int(m.group(0)) if m else None


def page_neighbours(title: str, total: int = 120) -> Optional[Tuple[int, int]]:
    n = page_number(title)
    if n is None:
        return None
    previous_page = total if n == 1 else n - 1
    next_page = 1 if n == total else n + 1
    return previous_page, next_page


def seo_meta(post: Post, default_image: str) -> Dict[str, Any]:
    description = (post.excerpt or "")[:DESCRIPTION_CHARS]
    if post.ogImage and post.ogImage.url:
        image = {"url": post.ogImage.url, "width": None, "height": None}
    else:
        image = {"url": default_image, "width": DEFAULT_IMAGE_SIZE, "height": DEFAULT_IMAGE_SIZE}
    return {
        "title": post.title,
        "description": description,
        "og_type": "article",
        "image": image,
    }
