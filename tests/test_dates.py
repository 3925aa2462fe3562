import datetime

import pytest

from sitehooks.dates import EPOCH, epoch_seconds, iso8601_utc, parse_datetime

UTC = datetime.timezone.utc


@pytest.mark.parametrize(
    "value",
    [
        "2024-01-01",
        "2024-01-01T00:00:00Z",
        "2024-01-01 00:00:00 +0000",
        "2024-01-01 02:00:00 +0200",
        "2024/01/01",
        "01 Jan 2024",
        "Mon, 01 Jan 2024 00:00:00 GMT",
        datetime.date(2024, 1, 1),
        datetime.datetime(2024, 1, 1),
        1704067200,
        1704067200000,
    ],
)
def test_parse_datetime_formats(value):
    assert parse_datetime(value) == datetime.datetime(2024, 1, 1, tzinfo=UTC)


@pytest.mark.parametrize("value", [None, "", "  ", "someday", True])
def test_parse_datetime_rejects(value):
    assert parse_datetime(value) is None


def test_epoch_seconds():
    assert epoch_seconds("2024-01-01") == 1704067200
    assert epoch_seconds("nope") == 0
    assert epoch_seconds(EPOCH) == 0


def test_iso8601_utc():
    assert iso8601_utc(1715328000) == "2024-05-10T08:00:00Z"
    assert iso8601_utc(0) == "1970-01-01T00:00:00Z"
