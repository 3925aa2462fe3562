"""Pin-aware sort key for paginated listings.

``rank = (pin_weight if pinned else 0) + epoch_seconds(date)``

With the default weight of 10^13 every pinned post sorts ahead of every
unpinned one under ``sort_reverse: true``; inside each group newer posts come
first.
"""

from __future__ import annotations

import datetime as _dt
import logging

from .config import SiteConfig, coerce_bool
from .dates import EPOCH, epoch_seconds, parse_datetime
from .models import Document

__all__ = ["RANK_FIELD", "attach_rank", "compute_rank", "pick_time"]

logger = logging.getLogger(__name__)

RANK_FIELD = "rank"


def pick_time(doc: Document, date_fields: tuple[str, ...]) -> _dt.datetime:
    """First parseable value among ``date_fields``, then the host date, then the epoch."""

    for field in date_fields:
        parsed = parse_datetime(doc.data.get(field))
        if parsed is not None:
            return parsed
    parsed = parse_datetime(doc.fallback_date)
    if parsed is not None:
        return parsed
    return EPOCH


def compute_rank(doc: Document, config: SiteConfig) -> int:
    cfg = config.rank
    pinned = coerce_bool(doc.data.get(cfg.pin_field), False)
    epoch = epoch_seconds(pick_time(doc, cfg.date_fields))
    return (cfg.pin_weight if pinned else 0) + epoch


def attach_rank(doc: Document, config: SiteConfig) -> int | None:
    """Store the rank on ``doc`` when ranking applies to its collection."""

    cfg = config.rank
    if not cfg.enabled or doc.collection not in cfg.collections:
        return None

    rank = compute_rank(doc, config)
    doc.data[RANK_FIELD] = rank
    if cfg.debug:
        logger.info("SHOWCASE_RANK doc=%s pin=%s -> rank=%d", doc.path, doc.data.get(cfg.pin_field), rank)
    return rank
