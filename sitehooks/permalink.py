"""Normalize post slugs and permalinks.

Each post gets ``data["slug"]`` and ``data["permalink"]`` of the form
``/<category slugs...>/<slug>/``.  Categories are only read to build the URL.
When the author never customised the slug (it still equals the slug derived
from the file name) and ``slug_from_title`` is on, the title's slug wins.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from .config import SiteConfig
from .models import Document
from .slug import slugify

__all__ = ["filename_tail", "normalize", "normalize_all", "normalize_document"]

logger = logging.getLogger(__name__)

# "2025-06-29-My-Post" or "1719619200-My-Post" (seconds or milliseconds)
FILENAME_PREFIX_RE = re.compile(r"^(?:\d{4}-\d{2}-\d{2}|\d{13}|\d{10})-")


def filename_tail(doc: Document) -> str:
    """Return the file name without extension and date/timestamp prefix."""

    return FILENAME_PREFIX_RE.sub("", doc.basename_without_ext, count=1)


def normalize(doc: Document, config: SiteConfig) -> tuple[str, str]:
    """Compute ``(slug, permalink)`` for ``doc`` and write both back."""

    mode = config.slugify.mode

    cats_raw = doc.categories
    cats_slug = [slug for slug in (slugify(label, mode) for label in cats_raw) if slug]

    fname_tail = filename_tail(doc)
    default_slug = slugify(fname_tail, mode)
    existing_src = doc.slug or fname_tail
    existing_slug = slugify(existing_src, mode)
    title = doc.title
    title_slug = slugify(title, mode) if title else ""

    if config.slugify.slug_from_title and existing_slug == default_slug and title_slug:
        final_slug = title_slug
    else:
        final_slug = existing_slug

    if not final_slug:
        # e.g. "2025-06-29-!!!.md": keep the date rather than emit "//"
        final_slug = slugify(doc.basename_without_ext, mode)
        logger.warning("No usable slug for %s; falling back to %r", doc.path, final_slug)

    parts = [*cats_slug, final_slug] if final_slug else cats_slug
    permalink = f"/{'/'.join(parts)}/" if parts else "/"

    doc.data["slug"] = final_slug
    doc.data["permalink"] = permalink

    if config.slugify.debug:
        logger.info(
            "SLUGRULES path=%s mode=%s cats_raw=%r cats_slug=%r default=%r existing=%r picked=%r permalink=%s",
            doc.path,
            mode.value,
            cats_raw,
            cats_slug,
            default_slug,
            existing_src,
            final_slug,
            permalink,
        )
    return final_slug, permalink


def normalize_document(doc: Document, config: SiteConfig) -> tuple[str, str] | None:
    """Normalize ``doc`` when it belongs to the posts collection."""

    if doc.collection != "posts":
        return None
    return normalize(doc, config)


def normalize_all(documents: Iterable[Document], config: SiteConfig) -> int:
    """Re-run normalization over every post; returns how many were touched."""

    count = 0
    for doc in documents:
        if normalize_document(doc, config) is not None:
            count += 1
    return count
