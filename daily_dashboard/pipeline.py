"""Feed ingestion pipeline and cross-source aggregation."""

from __future__ import annotations

import concurrent.futures
import logging
import random
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from .classify import is_included
from .extraction import parse_records
from .fallback import generate_fallback
from .models import FeedRecord, FeedSource
from .transport import TransportResolver

logger = logging.getLogger(__name__)


def sort_by_recency(records: Iterable[FeedRecord]) -> List[FeedRecord]:
    return sorted(records, key=lambda record: record.published, reverse=True)


def aggregate(
    results: Iterable[Sequence[FeedRecord]], limit: Optional[int] = None
) -> List[FeedRecord]:
    """Merge per-source results newest first, optionally keeping ``limit``."""
    merged: List[FeedRecord] = []
    for records in results:
        merged.extend(records or [])
    ordered = sort_by_recency(merged)
    if limit is not None:
        ordered = ordered[: max(limit, 0)]
    return ordered


class FeedPipeline:
    """Fetch, extract, classify and fall back for a single feed source."""

    def __init__(
        self,
        source: FeedSource,
        resolver: TransportResolver,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.source = source
        self.resolver = resolver
        self.rng = rng

    def fetch(self, count: int, now: Optional[datetime] = None) -> List[FeedRecord]:
        logger.info("Fetching %d records from %s", count, self.source.name)
        raw = self.resolver.fetch(self.source.url)
        if raw is None:
            logger.warning("No transport reached %s; using fallback data", self.source.name)
            return self.fallback(count, now)

        records = parse_records(raw, self.source, now=now)
        if self.source.rules is not None:
            kept = [record for record in records if is_included(record, self.source.rules)]
            logger.info(
                "Classifier kept %d of %d %s records", len(kept), len(records), self.source.name
            )
            records = kept

        if not records:
            logger.warning("Feed %s produced no usable records; using fallback data", self.source.name)
            return self.fallback(count, now)

        selected = sort_by_recency(records)[: max(count, 0)]
        logger.info("Selected %d records from %s", len(selected), self.source.name)
        return selected

    def fallback(self, count: int, now: Optional[datetime] = None) -> List[FeedRecord]:
        return sort_by_recency(generate_fallback(self.source, count, rng=self.rng, now=now))


def fetch_all(
    pipelines: Sequence[FeedPipeline],
    count_per_source: int,
    concurrency: int = 4,
    limit: Optional[int] = None,
) -> List[FeedRecord]:
    """Fetch every pipeline concurrently, wait for all, then merge."""
    if not pipelines:
        return []

    def process(pipeline: FeedPipeline) -> List[FeedRecord]:
        try:
            return pipeline.fetch(count_per_source)
        except Exception:
            logger.exception("Failed to process feed %s", pipeline.source.name)
            return []

    with concurrent.futures.ThreadPoolExecutor(
        max_workers=max(1, min(concurrency, len(pipelines)))
    ) as executor:
        futures = [executor.submit(process, pipeline) for pipeline in pipelines]
        # Submit order keeps ties between sources deterministic.
        results = [future.result() for future in futures]

    merged = aggregate(results, limit=limit)
    logger.info("Aggregated %d records from %d sources", len(merged), len(pipelines))
    return merged
