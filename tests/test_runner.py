import json
import time
from datetime import datetime, timedelta, timezone

import pytest

import daily_dashboard.runner as runner
from conftest import FakeResponse
from daily_dashboard.config import ProxyConfig, WeatherConfig
from daily_dashboard.models import CoffeeEntry, FeedRecord
from daily_dashboard.runner import RunConfig, execute

RELAY = "https://relay.test/"


def _config(section, **overrides):
    values = dict(
        section=section,
        count=3,
        proxies=[ProxyConfig(name="relay", base_url=RELAY)],
        weather=WeatherConfig(
            forecast_url="https://forecast.test/v1/forecast",
        ),
    )
    values.update(overrides)
    return RunConfig(**values)


def test_execute_news_section_from_live_feed(fake_session, rss_payload):
    session = fake_session({RELAY: FakeResponse(rss_payload)})

    result = execute(_config("news"), session=session)
    payload = json.loads(result.output_text)

    assert result.section == "news"
    assert [card["title"] for card in payload] == ["Phone security update", "GPU prices fall again"]
    assert payload[1]["icon"] == "🔧"
    assert payload[0]["source"] == "TechSpot"
    assert payload[0]["time_ago"].endswith("ago")


def test_execute_reviews_section_uses_fallback_when_offline(fake_session):
    result = execute(_config("reviews", count=2), session=fake_session())
    payload = result.payload

    assert len(payload) == 2
    assert {card["score_text"] for card in payload} <= {"Amazing", "Great"}
    assert all("platform" in card and "genre" in card for card in payload)


def test_execute_gamedev_caps_per_source_before_merge(fake_session):
    result = execute(_config("gamedev", count=4), session=fake_session())

    assert len(result.payload) == 8
    assert sorted({card["source"] for card in result.payload}) == ["Eurogamer", "Game Developer"]
    published = [datetime.fromisoformat(card["published"]) for card in result.payload]
    assert published == sorted(published, reverse=True)
    assert {card["icon"] for card in result.payload} <= {"🎮", "📰"}


def test_execute_rugby_section_uses_french_relative_times(fake_session):
    result = execute(_config("rugby", count=2), session=fake_session())

    assert all(card["time_ago"].startswith("Il y a") for card in result.payload)


def test_execute_weather_section(fake_session):
    session = fake_session(
        {
            "https://forecast.test": FakeResponse(
                payload={
                    "current": {
                        "temperature_2m": 3.0,
                        "relative_humidity_2m": 90,
                        "weather_code": 71,
                        "wind_speed_10m": 4.0,
                    }
                }
            ),
        }
    )

    payload = execute(_config("weather"), session=session).payload

    assert payload["icon"] == "🌨️"
    assert payload["location"] == "Obertrum am See, Austria"


def test_execute_unavailable_section_raises_runtime_error(fake_session):
    with pytest.raises(RuntimeError, match="forecast"):
        execute(_config("forecast"), session=fake_session())


def test_execute_fixtures_section_is_capped(fake_session):
    payload = execute(_config("fixtures", count=2), session=fake_session()).payload

    assert len(payload) == 2
    assert set(payload[0]) >= {"team1", "team2", "kickoff", "score"}


def test_execute_coffee_section_loads_from_cloud(fake_session):
    entry = CoffeeEntry(
        coffee_name="House",
        temperature=92,
        volume=150,
        brew_type="Aeropress",
        rating=4,
        grind_setting=12,
        brew_time_minutes=1,
        brew_time_seconds=45,
    )
    session = fake_session({"https://blobs.test/b/bin/latest": FakeResponse(payload=[entry.to_dict()])})
    config = _config(
        "coffee",
        coffee_sync_enabled=True,
        coffee_sync_url="https://blobs.test",
        jsonbin_bin_id="bin",
        jsonbin_api_key="key",
    )

    payload = execute(config, session=session).payload

    assert payload["synced"] is True
    assert payload["total_volume"] == 150
    assert payload["entries"][0]["coffee_name"] == "House"


def test_execute_coffee_section_requires_secrets_when_sync_enabled():
    with pytest.raises(ValueError, match="JSONBIN"):
        execute(_config("coffee", coffee_sync_enabled=True))


def test_execute_todos_section(fake_session):
    payload = execute(_config("todos"), session=fake_session()).payload

    assert payload["stats"]["total"] == 2
    assert [todo["priority"] for todo in payload["active"]] == ["text-dark", "text-dark"]


@pytest.mark.parametrize("section, count", [("news", 0), ("nonsense", 1)])
def test_execute_rejects_bad_input(fake_session, section, count):
    with pytest.raises(ValueError):
        execute(_config(section, count=count), session=fake_session())


def test_feed_sources_are_fetched_in_parallel(monkeypatch):
    delay = 0.3

    class SlowPipeline:
        def __init__(self, source, resolver):
            self.source = source

        def fetch(self, count):
            time.sleep(delay)
            return [
                FeedRecord(
                    title=self.source.name,
                    description="",
                    link=self.source.default_link,
                    published=datetime.now(timezone.utc) - timedelta(hours=1),
                    author=self.source.author,
                    source=self.source.name,
                    categories=[self.source.default_category],
                )
            ]

    monkeypatch.setattr(runner, "FeedPipeline", SlowPipeline)

    start = time.monotonic()
    result = execute(_config("gamedev", count=5, concurrency=2), session=object())
    elapsed = time.monotonic() - start

    assert sorted(card["title"] for card in result.payload) == ["Eurogamer", "Game Developer"]
    assert elapsed < delay * 1.8
