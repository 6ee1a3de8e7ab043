# quizblog/build.py
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import get_settings
from .content.backlinks import resolve_backlinks
from .content.render import markdown_to_html, page_neighbours, post_url, seo_meta
from .content.store import PostStore
from .utils.logger import setup_logger

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
SITE_TITLE = "Notes"


def make_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
    )
    env.globals.update(url=post_url, site_title=SITE_TITLE)
    return env


def render_post(env: Environment, store: PostStore, slug: str, mapping, api_url: str,
                default_image: str, total_pages: int) -> str:
    post = store.get_post(slug)
    body_html = markdown_to_html(post.content, slug, mapping.keys())
    backlinks = resolve_backlinks(mapping, post.slug, store)
    return env.get_template("post.html").render(
        post=post,
        body_html=body_html,
        backlinks=backlinks,
        nav=page_neighbours(post.title, total_pages),
        seo=seo_meta(post, default_image),
        api_url=api_url,
    )


def build_site(posts_dir, out_dir, api_url: Optional[str] = None) -> List[Path]:
    """Render every post to <out>/<slug>/index.html plus <out>/index.html."""
    settings = get_settings()
    api_url = api_url or settings.api_url
    store = PostStore(posts_dir)
    out = Path(out_dir)
    env = make_env()

    # one link mapping per build
    mapping = store.get_links_mapping()
    written: List[Path] = []
    for slug in mapping:
        html = render_post(env, store, slug, mapping, api_url,
                           settings.default_og_image, settings.total_pages)
        path = out / slug / "index.html"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        written.append(path)
        log.debug("Wrote %s", path)

    index = out / "index.html"
    index.parent.mkdir(parents=True, exist_ok=True)
    index.write_text(
        env.get_template("index.html").render(posts=store.get_all_posts(["slug", "title", "date", "excerpt"])),
        encoding="utf-8",
    )
    written.append(index)
    log.info("Built %d posts -> %s", len(mapping), out)
    return written


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Render markdown posts into a static site")
    parser.add_argument("--posts", default=settings.posts_dir, help="Directory of markdown posts")
    parser.add_argument("--out", default=settings.out_dir, help="Output directory")
    parser.add_argument("--api-url", default=settings.api_url, help="Question endpoint used by the Quiz Me button")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logger("DEBUG" if args.verbose else get_settings().log_level)
    build_site(args.posts, args.out, api_url=args.api_url)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
