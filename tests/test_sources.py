import pytest

from daily_dashboard.sources import SECTIONS, SOURCES, get_source


def test_every_section_points_at_known_sources():
    for keys in SECTIONS.values():
        for key in keys:
            assert get_source(key) is SOURCES[key]


def test_sources_have_usable_defaults():
    for source in SOURCES.values():
        assert source.url.startswith("https://")
        assert source.default_link.startswith("https://")
        assert len(source.fallback) == 8
        assert source.fallback_hours >= 24


def test_only_rugby_is_classified_and_only_reviews_are_enriched():
    assert [key for key, s in SOURCES.items() if s.rules is not None] == ["rugbyrama"]
    assert [key for key, s in SOURCES.items() if s.enrich is not None] == ["ign"]


def test_unknown_source_raises():
    with pytest.raises(ValueError, match="Unknown feed source"):
        get_source("nope")
