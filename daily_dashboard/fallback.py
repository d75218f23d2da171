"""Synthetic placeholder records for when no live feed is reachable."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .extraction import build_record
from .models import FeedRecord, FeedSource

logger = logging.getLogger(__name__)


def generate_fallback(
    source: FeedSource,
    count: int,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[FeedRecord]:
    """Build up to ``count`` records from the source's template table.

    Timestamps are spread randomly over the source's recency window so the
    output has the same shape as a live fetch.
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    window = max(source.fallback_hours, 2)
    templates = source.fallback[: max(count, 0)]
    logger.info("Generating %d fallback records for %s", len(templates), source.name)

    records: List[FeedRecord] = []
    for template in templates:
        record = build_record(
            source,
            title=template.title,
            description=template.description,
            link=source.default_link,
            published=now - timedelta(hours=rng.randint(1, window - 1)),
            author=source.author,
            categories=list(template.categories),
            extras=template.extras,
        )
        if record is not None:
            records.append(record)
    return records
