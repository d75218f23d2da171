"""Coffee log and its remote blob synchronisation."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

import requests

from .models import CoffeeEntry

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class CoffeeLog:
    """In-memory list of CoffeeEntry records with change notifications."""

    def __init__(self) -> None:
        self._entries: List[CoffeeEntry] = []
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def add(self, entry: CoffeeEntry) -> CoffeeEntry:
        self._entries.append(entry)
        self._notify()
        return entry

    def remove(self, entry_id: str) -> bool:
        for entry in self._entries:
            if entry.id == entry_id:
                self._entries.remove(entry)
                self._notify()
                return True
        return False

    def replace_all(self, entries: List[CoffeeEntry]) -> None:
        self._entries = list(entries)
        self._notify()

    def all(self) -> List[CoffeeEntry]:
        return list(self._entries)

    def todays(self, now: Optional[datetime] = None) -> List[CoffeeEntry]:
        today = (now or datetime.now(timezone.utc)).date()
        return [entry for entry in self._entries if entry.timestamp.date() == today]

    def total_entries(self) -> int:
        return len(self._entries)

    def total_volume(self) -> int:
        return sum(entry.volume for entry in self._entries)

    def average_rating(self) -> float:
        if not self._entries:
            return 0.0
        return sum(entry.rating for entry in self._entries) / len(self._entries)


class CloudSync:
    """Save and load a CoffeeLog as one JSON blob in a remote bin.

    The whole collection is overwritten on save and replaced on load. There is
    no merge or conflict detection, so only one writer should use a bin.
    """

    def __init__(
        self,
        base_url: str,
        bin_id: str,
        api_key: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.bin_id = bin_id
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def bin_url(self) -> str:
        return f"{self.base_url}/b/{self.bin_id}"

    def _headers(self) -> dict:
        return {"Content-Type": "application/json", "X-Master-Key": self.api_key}

    def save(self, log: CoffeeLog) -> bool:
        payload = [entry.to_dict() for entry in log.all()]
        try:
            response = self.session.put(
                self.bin_url, json=payload, headers=self._headers(), timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Failed to save coffee log: %s", exc)
            return False
        logger.info("Saved %d coffee entries to %s", len(payload), self.bin_url)
        return True

    def load(self, log: CoffeeLog) -> bool:
        try:
            response = self.session.get(
                f"{self.bin_url}/latest", headers=self._headers(), timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Failed to load coffee log: %s", exc)
            return False

        if isinstance(data, dict):
            data = data.get("record")
        if not isinstance(data, list):
            logger.warning("Coffee log payload has unexpected shape: %s", type(data).__name__)
            return False

        try:
            entries = [CoffeeEntry.from_dict(item) for item in data]
        except (TypeError, ValueError) as exc:
            logger.warning("Coffee log payload contains an invalid entry: %s", exc)
            return False

        log.replace_all(entries)
        logger.info("Loaded %d coffee entries from %s", len(entries), self.bin_url)
        return True
