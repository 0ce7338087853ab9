from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Protocol, Sequence

from .mock import generate_history
from .types import RETENTION_WINDOW, LotteryResult, Region

logger = logging.getLogger("xoso.store")


class ResultStore(Protocol):
    def get(self, region: Region) -> List[LotteryResult]:
        ...

    def set(self, region: Region, collection: Sequence[LotteryResult]) -> None:
        ...


class InMemoryResultStore:
    """Dictionary-backed store, mostly for tests and scripts."""

    def __init__(self) -> None:
        self._collections: Dict[Region, List[LotteryResult]] = {}
        self._lock = threading.Lock()

    def get(self, region: Region) -> List[LotteryResult]:
        with self._lock:
            return list(self._collections.get(Region.parse(region), []))

    def set(self, region: Region, collection: Sequence[LotteryResult]) -> None:
        with self._lock:
            self._collections[Region.parse(region)] = list(collection)


def merge_result(
    collection: Sequence[LotteryResult], result: LotteryResult, limit: int = RETENTION_WINDOW
) -> List[LotteryResult]:
    """Replace the entry for ``result.date`` in place, otherwise insert it newest-first; keep ``limit`` newest."""
    merged = list(collection)
    for index, existing in enumerate(merged):
        if existing.date == result.date:
            merged[index] = result
            return merged[:limit]
    position = next((i for i, existing in enumerate(merged) if existing.date < result.date), len(merged))
    merged.insert(position, result)
    return merged[:limit]



def find_by_date(collection: Sequence[LotteryResult], date) -> Optional[LotteryResult]:
    for result in collection:
        if result.date == date:
            return result
    return None


def seed_history(store: ResultStore, region: Region, days: int = RETENTION_WINDOW) -> List[LotteryResult]:
    collection = store.get(region)
    if collection:
        return collection
    logger.info("Seeding %s with %s days of generated results", Region.parse(region).value, days)
    collection = generate_history(region, days)
    store.set(region, collection)
    return collection
