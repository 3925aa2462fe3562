"""Showcase listing pages: pagination descriptors and take-over pages.

A *showcase* is any page or document with ``layout: showcase``.  Its posts
are listed through the paginator, sorted by :mod:`sitehooks.rank`.

Showcase documents that live in a collection other than posts (site tabs,
for instance) are not paginated by the paginator, so a real :class:`Page`
takes over their URL: it copies the tab's front matter and body, keeps the
tab markers so the theme still draws the tab header, and receives the
pagination descriptor.  The original document is switched off.

Paginators append ``- page N`` to titles unless the descriptor carries its
own title template; every descriptor therefore gets ``title`` filled in,
``":title"`` unless configured otherwise.
"""

from __future__ import annotations

import logging
import posixpath
import re
from typing import Any

from .config import SiteConfig
from .models import Document, Page, Site
from .rank import RANK_FIELD
from .slug import SlugMode, slugify

__all__ = [
    "SHOWCASE_LAYOUTS",
    "apply_showcase_settings",
    "create_takeover_pages",
    "disable_collection_showcase_output",
    "inject_pagination",
    "is_showcase",
    "pagination_descriptor",
    "repair_showcase_permalink",
    "resolve_showcase_permalink",
]

logger = logging.getLogger(__name__)

SHOWCASE_LAYOUTS = frozenset({"showcase", "showcase.html"})
SUPPRESSED_PREFIX = "/__tabs_suppressed__/"
TITLE_PLACEHOLDER_RE = re.compile(r":title", re.IGNORECASE)


def is_showcase(item: Document | Page) -> bool:
    return item.layout in SHOWCASE_LAYOUTS


def pagination_descriptor(config: SiteConfig, *, category: str = "") -> dict[str, Any]:
    """Return a fresh descriptor built from the configured defaults."""

    defaults = config.showcase.pagination
    descriptor: dict[str, Any] = {
        "enabled": True,
        "collection": "posts",
        "per_page": defaults.per_page,
        "sort_field": RANK_FIELD,
        "sort_reverse": defaults.sort_reverse,
        "title": defaults.title_template,
    }
    if category:
        descriptor["category"] = category
    return descriptor


def inject_pagination(page: Page, config: SiteConfig) -> dict[str, Any] | None:
    """Give a showcase page a descriptor, or fill in a missing title template.

    A descriptor that already names its own title is left untouched.
    """

    if not is_showcase(page):
        return None

    current = page.data.get("pagination")
    if current is None:
        descriptor = pagination_descriptor(config, category=page.title)
        page.data["pagination"] = descriptor
        if config.showcase.debug:
            logger.info("SHOWCASE_PAGINATION applied to %s: %r", page.path, descriptor)
        return descriptor

    if isinstance(current, dict) and not str(current.get("title") or "").strip():
        current["title"] = config.showcase.pagination.title_template
        if config.showcase.debug:
            logger.info("SHOWCASE_TITLE filled pagination.title for %s => %s", page.path, current["title"])
    return current if isinstance(current, dict) else None


def resolve_showcase_permalink(title: str, permalink: str, mode: SlugMode = SlugMode.DEFAULT) -> str:
    """URL for a showcase titled ``title`` whose front matter says ``permalink``.

    Empty, suppressed and ``:title`` permalinks become ``/<slug(title)>/``;
    any other permalink is kept as written.
    """

    if not permalink or TITLE_PLACEHOLDER_RE.search(permalink) or permalink.startswith(SUPPRESSED_PREFIX):
        return f"/{slugify(title, mode)}/"
    return permalink


def _as_directory(url: str) -> str:
    if posixpath.splitext(url)[1]:
        return posixpath.dirname(url).rstrip("/") + "/"
    return url if url.endswith("/") else f"{url}/"


def disable_collection_showcase_output(site: Site) -> list[Document]:
    """Stop non-post showcase documents from being written."""

    disabled: list[Document] = []
    for label, docs in site.iter_collections():
        if label == "posts":
            continue
        for doc in docs:
            if not is_showcase(doc):
                continue
            doc.data["output"] = False
            doc.data["published"] = False
            disabled.append(doc)
            if site.config.showcase.debug:
                logger.info("SHOWCASE_DISABLE output=false for %s", doc.path)
    return disabled


def create_takeover_pages(site: Site) -> list[Page]:
    """Add a real page at the URL of every titled non-post showcase document."""

    config = site.config
    existing = {page.path for page in site.pages}
    created: list[Page] = []
    for label, docs in site.iter_collections():
        if label == "posts":
            continue
        for doc in docs:
            if not is_showcase(doc):
                continue
            title = doc.title
            if not title:
                continue

            target_dir = _as_directory(resolve_showcase_permalink(title, doc.permalink, config.slugify.mode))
            doc.data["permalink"] = target_dir
            doc.data["published"] = False
            path = f"{target_dir}index.md"
            # a rerun over the same site must not add a second page
            if path in existing:
                continue

            data = {key: value for key, value in doc.data.items() if key not in ("output", "published")}
            data["collection"] = label
            data.setdefault("tab", True)
            data["layout"] = doc.layout or "showcase"
            data["title"] = title
            data["permalink"] = target_dir
            data["pagination"] = pagination_descriptor(config, category=title)

            page = Page(path=path, data=data, content=doc.content)
            site.pages.append(page)
            existing.add(path)
            created.append(page)
            if config.showcase.debug:
                logger.info("SHOWCASE_TAKEOVER collection=%s doc=%s -> %sindex.md", label, doc.path, target_dir)
    return created


def repair_showcase_permalink(doc: Document, config: SiteConfig) -> str | None:
    """Pre-render fix-up of a non-post showcase document's permalink.

    Returns the new permalink, or ``None`` when nothing changed.
    """

    if doc.collection == "posts" or not is_showcase(doc):
        return None
    title = doc.title
    if not title:
        return None

    current = doc.permalink
    updated = resolve_showcase_permalink(title, current, config.slugify.mode)
    if updated == current:
        return None
    doc.data["permalink"] = updated
    doc.data["published"] = False
    if config.showcase.debug:
        logger.info("SHOWCASE_PERMALINK(pre_render) %s -> %s", doc.path, updated)
    return updated


def apply_showcase_settings(site: Site) -> None:
    """Generator step: switch off tab showcases, add take-overs, paginate pages."""

    if not site.config.showcase.enabled:
        return
    disable_collection_showcase_output(site)
    create_takeover_pages(site)
    for page in site.pages:
        inject_pagination(page, site.config)
