from datetime import datetime, timezone

from daily_dashboard.classify import (
    INTERNATIONAL_RUGBY,
    enrich_review,
    extract_genre,
    extract_platform,
    extract_review_score,
    first_match_label,
    is_included,
)
from daily_dashboard.models import FeedRecord, RuleSet


def _record(title, description="", categories=None):
    return FeedRecord(
        title=title,
        description=description,
        link="https://example.com",
        published=datetime(2024, 1, 1, tzinfo=timezone.utc),
        author="Desk",
        source="Rugbyrama",
        categories=categories or ["Rugby"],
    )


def test_allow_list_includes_international_news():
    assert is_included(_record("Le XV de France dévoile sa liste"), INTERNATIONAL_RUGBY)
    assert is_included(_record("Springboks win", categories=["Test"]), INTERNATIONAL_RUGBY)


def test_deny_list_wins_over_allow_list():
    record = _record("Toulouse player called up by France")

    assert not is_included(record, INTERNATIONAL_RUGBY)


def test_unmatched_records_are_excluded():
    assert not is_included(_record("Transfer rumours", categories=["Misc"]), INTERNATIONAL_RUGBY)


def test_matching_is_case_insensitive_and_covers_categories():
    rules = RuleSet(allow=("six nations",), deny=())

    assert is_included(_record("Preview", categories=["SIX NATIONS"]), rules)
    assert is_included(_record("six nations preview"), rules)


def test_first_match_label_uses_table_order_and_default():
    table = ((("game", "gaming"), "games"), (("hardware",), "hw"))

    assert first_match_label("Gaming Hardware", table, "other") == "games"
    assert first_match_label("Hardware", table, "other") == "hw"
    assert first_match_label("Cooking", table, "other") == "other"
    assert first_match_label("", table, "other") == "other"


def test_extract_review_score_patterns():
    assert extract_review_score("Verdict. IGN Score: 9.5 Amazing") == 9.5
    assert extract_review_score("Rating: 7") == 7.0
    assert extract_review_score("We give it 8/10 overall") == 8.0
    assert extract_review_score("No verdict yet") == 0.0


def test_extract_platform_and_genre_defaults():
    assert extract_platform("Out now on Nintendo Switch") == "Nintendo Switch"
    assert extract_platform("Out now everywhere") == "Multiple Platforms"
    assert extract_genre("a tense horror game") == "Horror"
    assert extract_genre("a calm farming simulation") == "Simulation"
    assert extract_genre("something new") == "Unknown"


def test_enrich_review_sets_extras():
    record = _record("Starfield review")

    enrich_review(record, "<description>Our verdict for PS5: Score: 7.5. A strategy epic.</description>")

    assert record.extras == {"score": 7.5, "platform": "PS5", "genre": "Strategy"}
