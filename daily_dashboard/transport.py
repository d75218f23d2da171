"""Ordered network transports for reaching feeds through relays."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence
from urllib.parse import quote

import feedparser
import requests

from .models import TransportAttempt

logger = logging.getLogger(__name__)


def has_feed_entries(text: Optional[str]) -> bool:
    """Return True when the payload parses into at least one feed entry."""
    if not text or not text.strip():
        return False
    return len(feedparser.parse(text).entries) > 0


def direct_attempt() -> TransportAttempt:
    return TransportAttempt(name="direct", build_url=lambda url: url)


def relay_attempt(name: str, base: str, encode: bool = False) -> TransportAttempt:
    """Build an attempt that prefixes the feed URL with a relay base URL."""
    if encode:
        return TransportAttempt(name=name, build_url=lambda url: base + quote(url, safe=""))
    return TransportAttempt(name=name, build_url=lambda url: base + url)


def build_attempts(proxies: Iterable, include_direct: bool = False) -> List[TransportAttempt]:
    """Turn proxy configuration into the ordered attempt list."""
    attempts = [direct_attempt()] if include_direct else []
    for proxy in proxies:
        attempts.append(relay_attempt(proxy.name, proxy.base_url, proxy.encode))
    return attempts


class TransportResolver:
    """Try each transport in order until one returns a usable feed payload."""

    def __init__(
        self,
        attempts: Sequence[TransportAttempt],
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        self.attempts = list(attempts)
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, url: str) -> Optional[str]:
        for attempt in self.attempts:
            target = attempt.build_url(url)
            logger.info("Fetching %s via %s (%s)", url, attempt.name, target)
            try:
                response = self.session.get(target, timeout=self.timeout)
                response.raise_for_status()
                body = response.text
            except requests.RequestException as exc:
                logger.warning("Transport %s failed for %s: %s", attempt.name, url, exc)
                continue

            if not has_feed_entries(body):
                logger.warning(
                    "Transport %s returned %d characters without feed entries for %s",
                    attempt.name,
                    len(body or ""),
                    url,
                )
                continue

            logger.debug("Transport %s returned %d characters", attempt.name, len(body))
            return body

        logger.warning("All %d transports failed for %s", len(self.attempts), url)
        return None
