"""Two-level category index pages.

For every top category listed in ``hierarchical_topics`` the posts are
grouped by ``categories[1]`` (level 1) and ``categories[2]`` (level 2) and
one listing page is produced per node::

    /<top>/<level1>/
    /<top>/<level1>/<level2>/

No page is produced for the bare top category; the site provides that one
itself.  Categories on the posts are never modified.
"""

from __future__ import annotations

import datetime as _dt
import logging
from typing import Iterable, Sequence

from .config import SiteConfig
from .dates import EPOCH, parse_datetime
from .models import Document, IndexPage
from .slug import SlugMode, slugify

__all__ = ["build_tree", "effective_date", "generate_index_pages", "index_dir", "match_posts"]

logger = logging.getLogger(__name__)


def effective_date(doc: Document) -> _dt.datetime:
    """Front matter ``date`` if parseable, else the host timestamp, else the epoch."""

    for candidate in (doc.date, doc.fallback_date):
        parsed = parse_datetime(candidate)
        if parsed is not None:
            return parsed
    return EPOCH


def _level(cats: Sequence[str], index: int) -> str | None:
    if index >= len(cats):
        return None
    label = cats[index]
    return label if label else None


def build_tree(documents: Iterable[Document], top: str) -> dict[str, set[str]]:
    """Map each level-1 label under ``top`` to the set of its level-2 labels.

    ``top`` is matched exactly against the raw ``categories[0]`` label.
    Level-1 keys keep first-seen order.
    """

    tree: dict[str, set[str]] = {}
    for doc in documents:
        cats = doc.categories
        if not cats or cats[0] != top:
            continue
        l1 = _level(cats, 1)
        if l1 is None:
            continue
        children = tree.setdefault(l1, set())
        l2 = _level(cats, 2)
        if l2 is not None:
            children.add(l2)
    return tree


def match_posts(
    documents: Iterable[Document],
    top: str,
    level1: str | None = None,
    level2: str | None = None,
) -> list[Document]:
    """Return the documents under the node, newest first.

    Levels passed as ``None`` match anything.
    """

    matched: list[Document] = []
    for doc in documents:
        cats = doc.categories
        if not cats or cats[0] != top:
            continue
        if level1 is not None and _level(cats, 1) != level1:
            continue
        if level2 is not None and _level(cats, 2) != level2:
            continue
        matched.append(doc)
    matched.sort(key=effective_date, reverse=True)
    return matched


def index_dir(top: str, level1: str, level2: str | None = None, mode: SlugMode = SlugMode.DEFAULT) -> str:
    parts = [slugify(top, mode), slugify(level1, mode)]
    if level2 is not None:
        parts.append(slugify(level2, mode))
    return "/" + "/".join(parts) + "/"


def _index_page(
    posts: list[Document],
    top: str,
    level1: str,
    level2: str | None,
    mode: SlugMode,
) -> IndexPage:
    return IndexPage(
        top=top,
        level1=level1,
        level2=level2,
        title=str(level2 or level1 or top),
        dir=index_dir(top, level1, level2, mode),
        posts=tuple(match_posts(posts, top, level1, level2)),
    )


def generate_index_pages(documents: Iterable[Document], config: SiteConfig) -> list[IndexPage]:
    """Build every level-1 and level-2 index page for the configured tops."""

    if not config.topics:
        return []

    posts = [doc for doc in documents if doc.collection == "posts"]
    mode = config.slugify.mode
    pages: list[IndexPage] = []

    for top in config.topics:
        tree = build_tree(posts, top)
        if not tree:
            continue
        for level1, level2_set in tree.items():
            pages.append(_index_page(posts, top, level1, None, mode))
            for level2 in sorted(level2_set):
                pages.append(_index_page(posts, top, level1, level2, mode))

    logger.debug("Generated %d hierarchical index pages", len(pages))
    return pages
