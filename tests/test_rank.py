import datetime
import logging

import pytest

from sitehooks.config import PIN_WEIGHT, RankConfig, SiteConfig
from sitehooks.dates import epoch_seconds
from sitehooks.models import Document
from sitehooks.rank import RANK_FIELD, attach_rank, compute_rank, pick_time

JAN_2024 = 1704067200


def _doc(collection: str = "posts", fallback_date=None, **front_matter) -> Document:
    return Document.from_front_matter(
        "_posts/2024-01-01-x.md", front_matter, collection=collection, fallback_date=fallback_date
    )


def test_unpinned_rank_is_epoch_seconds():
    assert compute_rank(_doc(date="2024-01-01"), SiteConfig()) == JAN_2024


def test_pinned_rank_adds_weight():
    assert compute_rank(_doc(date="2024-01-01", pin=True), SiteConfig()) == PIN_WEIGHT + JAN_2024


@pytest.mark.parametrize("pin", ["true", "yes", "1", "On", 1])
def test_pin_accepts_truthy_strings(pin):
    assert compute_rank(_doc(date="2024-01-01", pin=pin), SiteConfig()) == PIN_WEIGHT + JAN_2024


@pytest.mark.parametrize("pin", ["false", "no", "0", None, False])
def test_pin_falsy_values(pin):
    assert compute_rank(_doc(date="2024-01-01", pin=pin), SiteConfig()) == JAN_2024


def test_old_pinned_post_outranks_new_unpinned_post():
    config = SiteConfig()
    pinned_old = _doc(date="2001-01-01", pin=True)
    fresh = _doc(date="2030-01-01")

    assert compute_rank(pinned_old, config) > compute_rank(fresh, config)


def test_undated_document_ranks_from_epoch():
    assert compute_rank(_doc(date="not a date"), SiteConfig()) == 0
    assert compute_rank(_doc(pin="yes"), SiteConfig()) == PIN_WEIGHT


def test_fallback_date_is_used_when_front_matter_has_none():
    doc = _doc(fallback_date=datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc))

    assert compute_rank(doc, SiteConfig()) == JAN_2024


def test_date_fields_are_tried_in_order():
    doc = _doc(updated="garbage", date="2024-01-01", published="2020-01-01")

    assert pick_time(doc, ("updated", "date", "published")).year == 2024
    assert pick_time(doc, ("published", "date")).year == 2020


def test_attach_rank_respects_collections_and_enabled():
    config = SiteConfig(rank=RankConfig(collections=("posts", "notes")))
    post = _doc(date="2024-01-01")
    note = _doc(collection="notes", date="2024-01-01")
    tab = _doc(collection="tabs", date="2024-01-01")

    assert attach_rank(post, config) == JAN_2024
    assert attach_rank(note, config) == JAN_2024
    assert attach_rank(tab, config) is None
    assert post.data[RANK_FIELD] == JAN_2024
    assert RANK_FIELD not in tab.data

    disabled = SiteConfig(rank=RankConfig(enabled=False))
    other = _doc(date="2024-01-01")
    assert attach_rank(other, disabled) is None
    assert RANK_FIELD not in other.data


def test_custom_pin_field_and_weight():
    config = SiteConfig(rank=RankConfig(pin_field="sticky", pin_weight=100))

    assert compute_rank(_doc(date="1970-01-01", sticky="yes", pin=False), config) == 100


def test_debug_logging(caplog):
    caplog.set_level(logging.INFO, logger="sitehooks.rank")

    attach_rank(_doc(date="2024-01-01"), SiteConfig(rank=RankConfig(debug=True)))

    assert "SHOWCASE_RANK" in caplog.text


def test_rank_matches_epoch_seconds_of_picked_time():
    doc = _doc(date="2024-05-10T08:00:00Z")

    assert compute_rank(doc, SiteConfig()) == epoch_seconds(pick_time(doc, ("date",))) == 1715328000
