"""Shared data models for daily_dashboard."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple


@dataclass
class FeedRecord:
    """Normalised feed item used throughout the app."""

    title: str
    description: str
    link: str
    published: datetime
    author: str
    source: str
    thumbnail: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            **self.extras,
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "published": self.published.isoformat(),
            "author": self.author,
            "source": self.source,
            "thumbnail": self.thumbnail,
            "categories": list(self.categories),
        }


@dataclass(frozen=True)
class RuleSet:
    """Keyword lists for allow/deny classification. Deny always wins."""

    allow: Tuple[str, ...] = ()
    deny: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TransportAttempt:
    """One named way of reaching a feed URL."""

    name: str
    build_url: Callable[[str], str]


@dataclass(frozen=True)
class FallbackTemplate:
    """A synthetic record used when no live source is reachable."""

    title: str
    description: str
    categories: Tuple[str, ...] = ()
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FeedSource:
    """Everything needed to ingest one feed."""

    key: str
    name: str
    url: str
    default_link: str
    author: str
    default_category: str
    base_url: str = ""
    description_limit: int = 200
    fallback_hours: int = 24
    fallback: Tuple[FallbackTemplate, ...] = ()
    rules: Optional[RuleSet] = None
    enrich: Optional[Callable[[FeedRecord, str], None]] = None


@dataclass
class TodoItem:
    """A single todo entry owned by a TodoStore."""

    title: str
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    id: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None
    is_completed: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("Todo title is required")
        if len(self.title) > 200:
            raise ValueError("Title cannot exceed 200 characters")
        if self.description and len(self.description) > 500:
            raise ValueError("Description cannot exceed 500 characters")

    @property
    def is_overdue(self) -> bool:
        return (
            self.deadline is not None
            and self.deadline < datetime.now(timezone.utc)
            and not self.is_completed
        )


@dataclass
class TodoStats:
    total: int
    active: int
    completed: int
    overdue: int


_COFFEE_RANGES = {
    "temperature": (1, 100, "Temperature must be between 1 and 100°C"),
    "volume": (1, 1000, "Volume must be between 1 and 1000ml"),
    "rating": (1, 5, "Please rate the coffee from 1 to 5 stars"),
    "grind_setting": (8, 24, "Grind setting must be between 8 and 24"),
    "brew_time_minutes": (0, 59, "Brew time minutes must be between 0 and 59"),
    "brew_time_seconds": (0, 59, "Brew time seconds must be between 0 and 59"),
}


@dataclass
class CoffeeEntry:
    """A single logged coffee."""

    coffee_name: str
    temperature: int
    volume: int
    brew_type: str
    rating: int
    grind_setting: int
    brew_time_minutes: int
    brew_time_seconds: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if not self.coffee_name or not self.coffee_name.strip():
            raise ValueError("Coffee name is required")
        if not self.brew_type or not self.brew_type.strip():
            raise ValueError("Please select a brew type")
        for name, (low, high, message) in _COFFEE_RANGES.items():
            value = getattr(self, name)
            if not isinstance(value, int) or not low <= value <= high:
                raise ValueError(f"{message}, got {value!r}")

    @property
    def total_brew_time_seconds(self) -> int:
        return self.brew_time_minutes * 60 + self.brew_time_seconds

    @property
    def formatted_brew_time(self) -> str:
        return f"{self.brew_time_minutes}:{self.brew_time_seconds:02d}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "coffee_name": self.coffee_name,
            "temperature": self.temperature,
            "volume": self.volume,
            "brew_type": self.brew_type,
            "rating": self.rating,
            "grind_setting": self.grind_setting,
            "brew_time_minutes": self.brew_time_minutes,
            "brew_time_seconds": self.brew_time_seconds,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CoffeeEntry":
        data = dict(data)
        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            data["timestamp"] = datetime.fromisoformat(timestamp)
        return cls(**data)


@dataclass
class CurrentWeather:
    temperature: float
    humidity: int
    wind_speed: float
    weather_code: int
    description: str
    location: str


@dataclass
class DailyForecast:
    date: datetime
    max_temperature: float
    min_temperature: float
    weather_code: int
    description: str
    precipitation_sum: float
    max_wind_speed: float


@dataclass
class WeeklyForecast:
    location: str
    days: List[DailyForecast] = field(default_factory=list)


@dataclass
class RugbyMatch:
    """A fixture or result shown in the rugby calendar."""

    team1: str
    team2: str
    competition: str
    venue: str
    kickoff: datetime
    score: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "team1": self.team1,
            "team2": self.team2,
            "competition": self.competition,
            "venue": self.venue,
            "kickoff": self.kickoff.isoformat(),
            "score": self.score,
            "description": self.description,
        }
