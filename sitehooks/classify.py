"""Decide which tail fragments (related posts, prev/next nav) follow a post."""

from __future__ import annotations

from .config import SiteConfig
from .models import Document

__all__ = ["POST_NAV", "RELATED_POSTS", "classify_tail", "tail_includes", "top_category_of"]

RELATED_POSTS = "related-posts"
POST_NAV = "post-nav"


def top_category_of(doc: Document) -> str:
    """Lower-cased ``categories[0]``, else the folder right under ``_posts/``."""

    cats = doc.categories
    top = cats[0].strip().lower() if cats else ""
    if top:
        return top

    parts = [part for part in doc.path.replace("\\", "/").split("/") if part]
    try:
        idx = parts.index("_posts")
    except ValueError:
        return ""
    # the segment after _posts/ must be a folder, not the post file itself
    if idx + 2 < len(parts):
        return parts[idx + 1].lower()
    return ""


def _in_group(top: str, group: tuple[str, ...]) -> bool:
    return any(top == label.strip().lower() for label in group)


def tail_includes(top: str, config: SiteConfig) -> list[str]:
    """Tail fragments for a top category; group names match case-insensitively."""

    top = top.strip().lower()
    groups = config.tail_format
    if _in_group(top, groups.both):
        return [RELATED_POSTS, POST_NAV]
    if _in_group(top, groups.nav_only):
        return [POST_NAV]
    if _in_group(top, groups.related_only):
        return [RELATED_POSTS]
    if _in_group(top, groups.none):
        return []
    return [RELATED_POSTS, POST_NAV]


def classify_tail(doc: Document, config: SiteConfig) -> list[str] | None:
    """Set ``data["tail_includes"]`` on ``layout: post`` documents.

    Returns the list written, or ``None`` when the document was skipped.
    """

    if doc.layout != "post":
        return None
    includes = tail_includes(top_category_of(doc), config)
    doc.data["tail_includes"] = includes
    return includes
