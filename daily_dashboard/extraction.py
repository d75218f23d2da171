"""Feed parsing and field selection on top of feedparser entries.

Every helper here returns an empty value instead of raising, so a malformed
entry falls back to the source defaults.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import feedparser
from bs4 import BeautifulSoup

from .dates import parse_date
from .models import FeedRecord, FeedSource

logger = logging.getLogger(__name__)

ITEM = "item"
ENTRY = "entry"

_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".bmp")
_IMAGE_KEYWORDS = ("image", "photo", "picture")
_REJECTED_IMAGE_KEYWORDS = ("avatar", "icon")


def _is_http(value: Optional[str]) -> bool:
    return bool(value) and value.lower().startswith(("http://", "https://"))


def parse_feed(raw: str) -> feedparser.FeedParserDict:
    """Parse a payload leniently; malformed documents are flagged, not rejected."""
    parsed = feedparser.parse(raw or "")
    if parsed.bozo:
        logger.debug("Feed payload is not well-formed: %s", parsed.get("bozo_exception"))
    return parsed


def detect_style(parsed: feedparser.FeedParserDict) -> str:
    """Return ``"entry"`` for Atom documents and ``"item"`` otherwise."""
    version = parsed.get("version") or ""
    return ENTRY if version.startswith("atom") else ITEM


def strip_html(raw_value: str) -> str:
    """Return text content extracted from HTML fragments."""
    if "<" not in raw_value:
        return re.sub(r"\s+", " ", raw_value).strip()
    soup = BeautifulSoup(raw_value, "html.parser")
    text = soup.get_text(separator=" ", strip=True)
    text = re.sub(r"\s+([.,;:!?])", r"\1", text)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip()


def clean_description(raw_value: str, limit: int = 200) -> str:
    if not raw_value or not raw_value.strip():
        return ""
    text = strip_html(raw_value)
    if len(text) > limit:
        text = text[:limit].rstrip() + "..."
    return text


def _content_values(entry) -> List[str]:
    values = []
    for content in entry.get("content") or []:
        value = content.get("value")
        if value:
            values.append(value)
    return values


def extract_summary(entry) -> str:
    summary = entry.get("summary")
    if not summary:
        summary_detail = entry.get("summary_detail")
        if summary_detail:
            summary = summary_detail.get("value")
    if not summary:
        contents = _content_values(entry)
        summary = contents[0] if contents else ""
    return summary or ""


def extract_link(entry) -> str:
    """Return an absolute article URL or an empty string."""
    candidates = [entry.get("link")]
    links = entry.get("links") or []
    candidates.extend(link.get("href") for link in links if link.get("rel") == "alternate")
    candidates.extend(link.get("href") for link in links if link.get("rel") != "enclosure")
    candidates.append(entry.get("id"))
    for candidate in candidates:
        candidate = (candidate or "").strip()
        if _is_http(candidate):
            return candidate
    return ""


def extract_published(entry, now: Optional[datetime] = None) -> datetime:
    for key in ("published_parsed", "updated_parsed", "created_parsed"):
        value = entry.get(key)
        if value:
            return datetime(*value[:6], tzinfo=timezone.utc)
    return parse_date(entry.get("published") or entry.get("updated"), now=now)


def is_image_url(url: str) -> bool:
    lowered = (url or "").lower()
    if not lowered:
        return False
    return any(ext in lowered for ext in _IMAGE_EXTENSIONS) or any(
        keyword in lowered for keyword in _IMAGE_KEYWORDS
    )


def normalise_image_url(url: str, base_url: str = "") -> Optional[str]:
    url = (url or "").strip()
    if url.startswith("//"):
        url = "https:" + url
    elif url.startswith("/") and base_url:
        url = base_url.rstrip("/") + url
    return url if _is_http(url) else None


def _html_images(fragments: Iterable[str]) -> List[str]:
    found = []
    for fragment in fragments:
        if not fragment or "<img" not in fragment.lower():
            continue
        soup = BeautifulSoup(fragment, "html.parser")
        found.extend(img.get("src", "") for img in soup.find_all("img"))
    return found


def _image_candidates(entry) -> List[str]:
    """Candidate image URLs, highest quality first."""
    media_content = entry.get("media_content") or []
    enclosures = entry.get("enclosures") or []

    candidates = [item.get("url", "") for item in media_content if item.get("medium") == "image"]
    candidates.extend(item.get("url", "") for item in entry.get("media_thumbnail") or [])
    candidates.extend(_html_images(_content_values(entry)))
    candidates.extend(
        enclosure.get("href", "")
        for enclosure in enclosures
        if (enclosure.get("type") or "").startswith("image/")
    )
    candidates.extend(item.get("url", "") for item in media_content if item.get("medium") != "image")
    candidates.extend(_html_images([entry.get("summary") or ""]))
    return candidates


def extract_image(entry, base_url: str = "") -> Optional[str]:
    """Return the best thumbnail candidate for a feed entry."""
    for candidate in _image_candidates(entry):
        if not is_image_url(candidate):
            continue
        if any(word in candidate.lower() for word in _REJECTED_IMAGE_KEYWORDS):
            logger.debug("Rejecting decorative image %s", candidate)
            continue
        url = normalise_image_url(candidate, base_url)
        if url:
            return url
    return None


def extract_categories(entry, default: str) -> List[str]:
    categories: List[str] = []
    for tag in entry.get("tags") or []:
        value = (tag.get("term") or tag.get("label") or "").strip()
        if value and value not in categories:
            categories.append(value)
    return categories or [default]


def entry_text(entry) -> str:
    """Title, summary, content and tags joined for keyword scans."""
    parts = [entry.get("title") or "", extract_summary(entry), *_content_values(entry)]
    parts.extend(tag.get("term") or "" for tag in entry.get("tags") or [])
    return " ".join(part for part in parts if part)


def build_record(
    source: FeedSource,
    title: str,
    description: str = "",
    link: str = "",
    published: Optional[datetime] = None,
    author: str = "",
    thumbnail: Optional[str] = None,
    categories: Optional[List[str]] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> Optional[FeedRecord]:
    """Apply source defaults and return a record, or None without a title."""
    title = (title or "").strip()
    if not title:
        return None
    return FeedRecord(
        title=title,
        description=description or "",
        link=link if _is_http(link) else source.default_link,
        published=published or parse_date(None),
        author=(author or "").strip() or source.author,
        source=source.name,
        thumbnail=thumbnail or None,
        categories=list(categories) if categories else [source.default_category],
        extras=dict(extras or {}),
    )


def parse_records(raw: str, source: FeedSource, now: Optional[datetime] = None) -> List[FeedRecord]:
    """Extract every titled item or entry from a feed payload."""
    parsed = parse_feed(raw)
    style = detect_style(parsed)
    logger.info("Found %d %s elements in %s feed", len(parsed.entries), style, source.name)

    records: List[FeedRecord] = []
    for entry in parsed.entries:
        title = entry.get("title")
        if not title or not title.strip():
            logger.debug("Skipping %s without title in %s feed", style, source.name)
            continue

        author = entry.get("author") or ""
        if "<" in author:
            author = strip_html(author)

        record = build_record(
            source,
            title=title,
            description=clean_description(extract_summary(entry), source.description_limit),
            link=extract_link(entry),
            published=extract_published(entry, now=now),
            author=author,
            thumbnail=extract_image(entry, source.base_url),
            categories=extract_categories(entry, source.default_category),
        )
        if record is None:
            continue
        if source.enrich is not None:
            source.enrich(record, entry_text(entry))
        records.append(record)

    return records
