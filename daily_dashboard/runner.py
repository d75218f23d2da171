"""High-level orchestration for the daily_dashboard application."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import requests

from .coffee import CloudSync, CoffeeLog
from .config import FixturesConfig, ProxyConfig, WeatherConfig, default_proxies
from .fixtures import FixtureCalendar
from .models import FeedRecord
from .pipeline import FeedPipeline, fetch_all
from .presentation import (
    category_icon,
    genre_icon,
    rugby_icon,
    score_color,
    score_text,
    source_icon,
    time_ago,
    todo_priority_class,
    weather_icon,
)
from .sources import SECTIONS, get_source
from .todos import TodoStore
from .transport import TransportResolver, build_attempts
from .weather import WeatherClient

logger = logging.getLogger(__name__)

FEED_SECTIONS = tuple(SECTIONS)
OTHER_SECTIONS = ("weather", "forecast", "fixtures", "coffee", "todos")
ALL_SECTIONS = FEED_SECTIONS + OTHER_SECTIONS


@dataclass
class RunConfig:
    """Runtime options for executing the application."""

    section: str
    count: int = 10
    concurrency: int = 4
    request_timeout: float = 10.0
    user_agent: str = "daily-dashboard/0.1"
    direct: bool = False
    proxies: List[ProxyConfig] = field(default_factory=default_proxies)
    weather: WeatherConfig = field(default_factory=WeatherConfig)
    fixtures: FixturesConfig = field(default_factory=FixturesConfig)
    sportradar_api_key: Optional[str] = None
    coffee_sync_enabled: bool = False
    coffee_sync_url: str = "https://api.jsonbin.io/v3"
    jsonbin_bin_id: Optional[str] = None
    jsonbin_api_key: Optional[str] = None


@dataclass
class RunResult:
    """Returned data after executing the app."""

    output_text: str
    payload: Any
    section: str


def build_session(user_agent: str) -> requests.Session:
    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    return session


def _feed_card(record: FeedRecord, now: datetime) -> dict:
    card = record.to_dict()
    card["time_ago"] = time_ago(record.published, now)
    card["icon"] = category_icon(record.categories[0])
    return card


def _gamedev_card(record: FeedRecord, now: datetime) -> dict:
    card = _feed_card(record, now)
    card["icon"] = source_icon(record.source)
    return card


def _review_card(record: FeedRecord, now: datetime) -> dict:
    card = _feed_card(record, now)
    score = float(record.extras.get("score", 0.0))
    card["score_text"] = score_text(score)
    card["score_color"] = score_color(score)
    card["icon"] = genre_icon(record.extras.get("genre", ""))
    return card


def _rugby_card(record: FeedRecord, now: datetime) -> dict:
    card = record.to_dict()
    card["time_ago"] = time_ago(record.published, now, language="fr")
    card["icon"] = rugby_icon(record.categories[0])
    return card


CARD_BUILDERS: Dict[str, Callable[[FeedRecord, datetime], dict]] = {
    "news": _feed_card,
    "gamedev": _gamedev_card,
    "reviews": _review_card,
    "rugby": _rugby_card,
}


class Dashboard:
    """Builds the JSON-ready payload for each dashboard section."""

    def __init__(self, config: RunConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or build_session(config.user_agent)
        self.resolver = TransportResolver(
            build_attempts(config.proxies, include_direct=config.direct),
            session=self.session,
            timeout=config.request_timeout,
        )

    def feed_section(self, section: str, count: int) -> List[dict]:
        try:
            keys = SECTIONS[section]
        except KeyError:
            raise ValueError(f"Unknown feed section: {section}") from None

        pipelines = [FeedPipeline(get_source(key), self.resolver) for key in keys]
        # count applies per source; the merged list is not re-capped.
        records = fetch_all(pipelines, count, concurrency=self.config.concurrency)
        now = datetime.now(timezone.utc)
        build_card = CARD_BUILDERS[section]
        return [build_card(record, now) for record in records]

    def _weather_client(self) -> WeatherClient:
        return WeatherClient(self.config.weather, self.session, self.config.request_timeout)

    def weather(self) -> Optional[dict]:
        current = self._weather_client().current()
        if current is None:
            return None
        return {
            "location": current.location,
            "temperature": current.temperature,
            "humidity": current.humidity,
            "wind_speed": current.wind_speed,
            "weather_code": current.weather_code,
            "description": current.description,
            "icon": weather_icon(current.weather_code),
        }

    def forecast(self) -> Optional[dict]:
        forecast = self._weather_client().weekly_forecast()
        if forecast is None:
            return None
        return {
            "location": forecast.location,
            "days": [
                {
                    "date": day.date.date().isoformat(),
                    "max_temperature": day.max_temperature,
                    "min_temperature": day.min_temperature,
                    "precipitation_sum": day.precipitation_sum,
                    "max_wind_speed": day.max_wind_speed,
                    "weather_code": day.weather_code,
                    "description": day.description,
                    "icon": weather_icon(day.weather_code),
                }
                for day in forecast.days
            ],
        }

    def fixtures(self, count: int) -> List[dict]:
        calendar = FixtureCalendar(
            api_key=self.config.sportradar_api_key,
            session=self.session,
            api_url=self.config.fixtures.api_url,
            competitions=self.config.fixtures.competitions,
            timeout=self.config.request_timeout,
        )
        return [match.to_dict() for match in calendar.matches()[:count]]

    def coffee(self) -> dict:
        log = CoffeeLog()
        synced = False
        if self.config.coffee_sync_enabled:
            sync = CloudSync(
                self.config.coffee_sync_url,
                self.config.jsonbin_bin_id or "",
                self.config.jsonbin_api_key or "",
                session=self.session,
                timeout=self.config.request_timeout,
            )
            synced = sync.load(log)
            if not synced:
                logger.warning("Coffee log could not be loaded from cloud storage")
        return {
            "synced": synced,
            "total_entries": log.total_entries(),
            "total_volume": log.total_volume(),
            "average_rating": round(log.average_rating(), 2),
            "today": [entry.to_dict() for entry in log.todays()],
            "entries": [entry.to_dict() for entry in log.all()],
        }

    def todos(self) -> dict:
        store = TodoStore.with_samples()
        stats = store.stats()
        return {
            "stats": {
                "total": stats.total,
                "active": stats.active,
                "completed": stats.completed,
                "overdue": stats.overdue,
            },
            "active": [
                {
                    "id": todo.id,
                    "title": todo.title,
                    "description": todo.description,
                    "deadline": todo.deadline.isoformat() if todo.deadline else None,
                    "priority": todo_priority_class(todo),
                }
                for todo in store.active()
            ],
        }

    def build(self, section: str, count: int) -> Any:
        if section in SECTIONS:
            return self.feed_section(section, count)
        if section == "weather":
            return self.weather()
        if section == "forecast":
            return self.forecast()
        if section == "fixtures":
            return self.fixtures(count)
        if section == "coffee":
            return self.coffee()
        if section == "todos":
            return self.todos()
        raise ValueError(f"Unknown section: {section}")


def execute(config: RunConfig, session: Optional[requests.Session] = None) -> RunResult:
    """Run the application logic and return the result payload."""
    if config.count < 1:
        raise ValueError("--count must be positive.")
    if config.coffee_sync_enabled and config.section == "coffee":
        if not (config.jsonbin_bin_id and config.jsonbin_api_key):
            raise ValueError("Coffee sync enabled but JSONBIN_BIN_ID/JSONBIN_API_KEY are missing.")

    logger.info("Building section %s (count=%d)", config.section, config.count)
    payload = Dashboard(config, session=session).build(config.section, config.count)
    if payload is None:
        raise RuntimeError(f"Section {config.section} is currently unavailable.")

    output_text = json.dumps(payload, indent=2, ensure_ascii=False)
    return RunResult(output_text=output_text, payload=payload, section=config.section)
