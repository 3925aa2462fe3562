"""Run the build hooks in their phase order.

A build goes through three phases, each finishing before the next starts:

``post_init``
    Per document and page, right after loading: permalinks, ranks,
    last-modified stamps, pagination descriptors on showcase pages.
``generate``
    Once per site, with the full document set known: a second permalink
    pass and the showcase settings (both ``highest``), then the
    hierarchical index pages (``low``).
``pre_render``
    Per document, just before rendering: tail fragments for posts and the
    showcase permalink fix-up for other collections.

Within a phase hooks run from ``highest`` to ``lowest`` priority, in
registration order for equal priorities.  Errors propagate and abort the
build.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Iterable, Sequence

from . import classify, hierarchy, lastmod, permalink, rank, showcase
from .models import Site

__all__ = ["PHASES", "PRIORITIES", "Hook", "default_hooks", "ordered", "run"]

logger = logging.getLogger(__name__)

PHASES = ("post_init", "generate", "pre_render")
PRIORITIES = {"highest": 100, "high": 10, "normal": 0, "low": -10, "lowest": -100}


@dataclasses.dataclass(frozen=True)
class Hook:
    """A named site-level callable bound to a phase and a priority."""

    name: str
    phase: str
    func: Callable[[Site], object]
    priority: str = "normal"

    def __post_init__(self) -> None:
        if self.phase not in PHASES:
            raise ValueError(f"Unknown phase {self.phase!r} for hook {self.name!r}")
        if self.priority not in PRIORITIES:
            raise ValueError(f"Unknown priority {self.priority!r} for hook {self.name!r}")


def _normalize_permalinks(site: Site) -> None:
    permalink.normalize_all(site.documents, site.config)


def _attach_ranks(site: Site) -> None:
    for doc in site.documents:
        rank.attach_rank(doc, site.config)


def _attach_last_modified(site: Site) -> None:
    if site.history is None:
        return
    for doc in site.posts:
        lastmod.attach_last_modified(doc, site.history)


def _inject_page_pagination(site: Site) -> None:
    if not site.config.showcase.enabled:
        return
    for page in site.pages:
        showcase.inject_pagination(page, site.config)


def _generate_index_pages(site: Site) -> None:
    site.index_pages = hierarchy.generate_index_pages(site.documents, site.config)


def _classify_tails(site: Site) -> None:
    for doc in site.posts:
        classify.classify_tail(doc, site.config)


def _repair_showcase_permalinks(site: Site) -> None:
    for doc in site.documents:
        showcase.repair_showcase_permalink(doc, site.config)


def default_hooks() -> list[Hook]:
    return [
        Hook("permalink-normalizer", "post_init", _normalize_permalinks),
        Hook("showcase-rank", "post_init", _attach_ranks),
        Hook("posts-lastmod", "post_init", _attach_last_modified),
        Hook("showcase-pagination", "post_init", _inject_page_pagination),
        Hook("permalink-generator", "generate", _normalize_permalinks, priority="highest"),
        Hook("showcase-settings", "generate", showcase.apply_showcase_settings, priority="highest"),
        Hook("hierarchical-indexes", "generate", _generate_index_pages, priority="low"),
        Hook("post-classifier", "pre_render", _classify_tails),
        Hook("showcase-permalink", "pre_render", _repair_showcase_permalinks),
    ]


def ordered(hooks: Iterable[Hook], phase: str) -> list[Hook]:
    """Hooks of ``phase`` sorted by descending priority; stable for ties."""

    selected = [hook for hook in hooks if hook.phase == phase]
    return sorted(selected, key=lambda hook: -PRIORITIES[hook.priority])


def run(site: Site, hooks: Sequence[Hook] | None = None) -> Site:
    """Run every phase over ``site`` and return it."""

    registered = list(default_hooks() if hooks is None else hooks)
    for phase in PHASES:
        for hook in ordered(registered, phase):
            logger.debug("Running %s hook %s", phase, hook.name)
            hook.func(site)
    return site
