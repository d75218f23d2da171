"""Keyword classification of feed records."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Sequence, Tuple

from .models import FeedRecord, RuleSet

logger = logging.getLogger(__name__)

LabelTable = Sequence[Tuple[Tuple[str, ...], str]]

INTERNATIONAL_RUGBY = RuleSet(
    allow=(
        "Rugby Championship",
        "Six Nations",
        "Tournoi des 6 Nations",
        "XV de France",
        "Coupe du Monde",
        "World Cup",
        "Test Match",
        "International",
        "Angleterre",
        "England",
        "Irlande",
        "Ireland",
        "Ecosse",
        "Scotland",
        "Pays de Galles",
        "Wales",
        "Italie",
        "Italy",
        "Afrique du Sud",
        "South Africa",
        "Nouvelle-Zélande",
        "New Zealand",
        "Australie",
        "Australia",
        "Argentine",
        "Argentina",
        "Japon",
        "Japan",
        "All Blacks",
        "Springboks",
        "Wallabies",
        "Pumas",
    ),
    deny=(
        "Top 14",
        "Pro D2",
        "Champions Cup",
        "Challenge Cup",
        "URC",
        "Premiership",
        "Stade Français",
        "Toulouse",
        "Racing 92",
        "Clermont",
        "Toulon",
        "La Rochelle",
        "Bordeaux",
        "Montpellier",
        "Lyon",
        "Castres",
        "Pau",
        "Perpignan",
        "Bayonne",
        "Biarritz",
    ),
)

PLATFORMS = ("PC", "PS5", "PS4", "Xbox Series X/S", "Xbox One", "Nintendo Switch", "Steam Deck")
GENRES = ("Action", "Adventure", "RPG", "Strategy", "Shooter", "Sports", "Racing", "Simulation", "Puzzle", "Horror")

_SCORE_PATTERNS = (
    re.compile(r"IGN\s+Score:\s*(\d+(?:\.\d+)?)", re.IGNORECASE),
    re.compile(r"Score:\s*(\d+(?:\.\d+)?)", re.IGNORECASE),
    re.compile(r"Rating:\s*(\d+(?:\.\d+)?)", re.IGNORECASE),
    re.compile(r"(\d+(?:\.\d+)?)\s*/\s*10\b"),
)


def searchable_text(record: FeedRecord) -> str:
    parts = [record.title, record.description, *record.categories]
    return " ".join(part for part in parts if part).casefold()


def matches_any(text: str, keywords: Iterable[str]) -> Optional[str]:
    """Return the first keyword contained in the case-folded text."""
    for keyword in keywords:
        if keyword.casefold() in text:
            return keyword
    return None


def is_included(record: FeedRecord, rules: RuleSet) -> bool:
    text = searchable_text(record)
    denied = matches_any(text, rules.deny)
    if denied:
        logger.debug("Excluding %r (matched deny keyword %r)", record.title, denied)
        return False
    allowed = matches_any(text, rules.allow)
    if allowed:
        logger.debug("Including %r (matched allow keyword %r)", record.title, allowed)
        return True
    logger.debug("Excluding %r (no allow keyword)", record.title)
    return False


def first_match_label(text: str, table: LabelTable, default: str) -> str:
    """Return the label of the first row whose keywords occur in ``text``."""
    lowered = (text or "").casefold()
    for keywords, label in table:
        if matches_any(lowered, keywords):
            return label
    return default


def extract_review_score(text: str) -> float:
    for pattern in _SCORE_PATTERNS:
        match = pattern.search(text or "")
        if match:
            try:
                return float(match.group(1))
            except ValueError:
                continue
    return 0.0


def extract_platform(text: str) -> str:
    lowered = (text or "").casefold()
    for platform in PLATFORMS:
        if platform.casefold() in lowered:
            return platform
    return "Multiple Platforms"


def extract_genre(text: str) -> str:
    lowered = (text or "").casefold()
    for genre in GENRES:
        if genre.casefold() in lowered:
            return genre
    return "Unknown"


def enrich_review(record: FeedRecord, text: str) -> None:
    """Derive score, platform and genre for a game review record."""
    record.extras["score"] = extract_review_score(text)
    record.extras["platform"] = extract_platform(text)
    record.extras["genre"] = extract_genre(text)
