from datetime import datetime, timezone

import pytest

from daily_dashboard.dates import parse_date

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Wed, 02 Oct 2024 10:00:00 +0000", datetime(2024, 10, 2, 10, 0, tzinfo=timezone.utc)),
        ("Wed, 02 Oct 2024 12:00:00 +0200", datetime(2024, 10, 2, 10, 0, tzinfo=timezone.utc)),
        ("2024-10-02T10:00:00Z", datetime(2024, 10, 2, 10, 0, tzinfo=timezone.utc)),
        ("2024-10-02 10:00:00", datetime(2024, 10, 2, 10, 0, tzinfo=timezone.utc)),
        ("Wed, 02 Oct 2024 10:00:00 EST", datetime(2024, 10, 2, 15, 0, tzinfo=timezone.utc)),
        ("Wed, 02 Oct 2024 10:00:00 PDT", datetime(2024, 10, 2, 17, 0, tzinfo=timezone.utc)),
        ("Wed, 02 Oct 2024 10:00:00 GMT", datetime(2024, 10, 2, 10, 0, tzinfo=timezone.utc)),
    ],
)
def test_parse_date_normalises_to_utc(text, expected):
    assert parse_date(text, now=NOW) == expected


@pytest.mark.parametrize("text", ["", "   ", None, "not a date at all", "??"])
def test_parse_date_falls_back_to_now(text):
    assert parse_date(text, now=NOW) == NOW


def test_parse_date_defaults_to_current_utc_instant():
    before = datetime.now(timezone.utc)
    value = parse_date("garbage")
    after = datetime.now(timezone.utc)

    assert value.tzinfo is not None
    assert before <= value <= after
