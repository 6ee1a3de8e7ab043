# quizblog/content/backlinks.py
import logging
from typing import Dict, List, Mapping, Sequence

from .models import BacklinkSummary
from .store import PostNotFound

log = logging.getLogger(__name__)


def find_backlinks(mapping: Mapping[str, Sequence[str]], target: str) -> List[str]:
    """Keys whose link sequence contains `target`, never `target` itself."""
    return [k for k, links in mapping.items() if k != target and target in links]


def resolve_backlinks(mapping: Mapping[str, Sequence[str]], target: str, store) -> Dict[str, BacklinkSummary]:
    """
    Title/excerpt for every post linking to `target`.
    Backlinks without content in the store are dropped.
    """
    out: Dict[str, BacklinkSummary] = {}
    for slug in find_backlinks(mapping, target):
        try:
            data = store.get_post_by_slug(slug, ["title", "excerpt"])
        except PostNotFound:
            log.debug("Backlink %s -> %s has no content; skipping", slug, target)
            continue
        out[slug] = BacklinkSummary(**data)
    return out
