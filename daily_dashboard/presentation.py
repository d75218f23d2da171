"""Display helpers mapping record fields to icons, labels and relative times."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from .classify import first_match_label
from .models import TodoItem

_TIME_AGO_WORDS = {
    "en": {
        "day": ("{n} day ago", "{n} days ago"),
        "hour": ("{n} hour ago", "{n} hours ago"),
        "minute": ("{n} minute ago", "{n} minutes ago"),
        "now": "Just now",
    },
    "fr": {
        "day": ("Il y a {n} jour", "Il y a {n} jours"),
        "hour": ("Il y a {n} heure", "Il y a {n} heures"),
        "minute": ("Il y a {n} minute", "Il y a {n} minutes"),
        "now": "À l'instant",
    },
}

CATEGORY_ICONS = (
    (("gaming", "game"), "🎮"),
    (("hardware",), "🔧"),
    (("software",), "💻"),
    (("mobile", "phone"), "📱"),
    (("security",), "🔒"),
    (("ai", "artificial"), "🤖"),
    (("review",), "⭐"),
    (("deal",), "💰"),
)

RUGBY_ICONS = (
    (("rugby championship",), "🏆"),
    (("six nations", "tournoi"), "🇪🇺"),
    (("xv de france", "france"), "🇫🇷"),
    (("world cup", "coupe du monde"), "🌍"),
    (("england", "angleterre"), "🏴\U000e0067\U000e0062\U000e0065\U000e006e\U000e0067\U000e007f"),
    (("ireland", "irlande"), "🇮🇪"),
    (("scotland", "ecosse"), "🏴\U000e0067\U000e0062\U000e0073\U000e0063\U000e0074\U000e007f"),
    (("wales", "pays de galles"), "🏴\U000e0067\U000e0062\U000e0077\U000e006c\U000e0073\U000e007f"),
    (("italy", "italie"), "🇮🇹"),
    (("south africa", "afrique du sud"), "🇿🇦"),
    (("new zealand", "nouvelle-zélande", "all blacks"), "🇳🇿"),
    (("australia", "australie", "wallabies"), "🇦🇺"),
    (("argentina", "argentine", "pumas"), "🇦🇷"),
    (("japan", "japon"), "🇯🇵"),
)

GENRE_ICONS = (
    (("action",), "⚔️"),
    (("adventure",), "🗺️"),
    (("rpg",), "🧙‍♂️"),
    (("strategy",), "♟️"),
    (("shooter",), "🔫"),
    (("sports",), "⚽"),
    (("racing",), "🏎️"),
    (("simulation",), "🎮"),
    (("puzzle",), "🧩"),
    (("horror",), "👻"),
)

SOURCE_ICONS = {
    "Eurogamer": "🎮",
    "Game Developer": "📰",
}

# (minimum score, label, colour); checked top to bottom.
SCORE_BANDS = (
    (9.0, "Amazing", "success"),
    (8.0, "Great", "primary"),
    (7.0, "Good", "info"),
    (6.0, "Okay", "warning"),
    (5.0, "Mediocre", "secondary"),
)

WEATHER_DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

_WEATHER_ICON_GROUPS = (
    ((0, 1), "☀️"),
    ((2,), "⛅"),
    ((3,), "☁️"),
    ((45, 48), "🌫️"),
    ((51, 53, 55, 56, 57), "🌦️"),
    ((61, 63, 65, 66, 67, 80, 81, 82), "🌧️"),
    ((71, 73, 75, 77, 85, 86), "🌨️"),
    ((95, 96, 99), "⛈️"),
)


def time_ago(published: datetime, now: Optional[datetime] = None, language: str = "en") -> str:
    """Describe how long ago ``published`` was, in English or French."""
    words = _TIME_AGO_WORDS.get(language, _TIME_AGO_WORDS["en"])
    now = now or datetime.now(timezone.utc)
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    delta = now - published
    if delta < timedelta(0):
        return words["now"]

    hours, remainder = divmod(delta.seconds, 3600)
    minutes = remainder // 60
    for unit, amount in (("day", delta.days), ("hour", hours), ("minute", minutes)):
        if amount > 0:
            singular, plural = words[unit]
            return (plural if amount > 1 else singular).format(n=amount)
    return words["now"]


def category_icon(category: str) -> str:
    return first_match_label(category, CATEGORY_ICONS, "🔧")


def rugby_icon(category: str) -> str:
    return first_match_label(category, RUGBY_ICONS, "🏉")


def genre_icon(genre: str) -> str:
    return first_match_label(genre, GENRE_ICONS, "🎮")


def source_icon(source: str) -> str:
    return SOURCE_ICONS.get(source, "📄")


def score_text(score: float) -> str:
    for minimum, label, _ in SCORE_BANDS:
        if score >= minimum:
            return label
    return "Bad" if score > 0 else "Not Scored"


def score_color(score: float) -> str:
    for minimum, _, colour in SCORE_BANDS:
        if score >= minimum:
            return colour
    return "danger" if score > 0 else "light"


def weather_description(code: int) -> str:
    return WEATHER_DESCRIPTIONS.get(code, "Unknown")


def weather_icon(code: int) -> str:
    for codes, icon in _WEATHER_ICON_GROUPS:
        if code in codes:
            return icon
    return "🌤️"


def todo_priority_class(todo: TodoItem, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    if todo.is_completed:
        return "text-muted"
    if todo.deadline is not None and todo.deadline < now:
        return "text-danger"
    if todo.deadline is not None and todo.deadline <= now + timedelta(days=1):
        return "text-warning"
    return "text-dark"
