from __future__ import annotations

import datetime as dt
import logging
import random
import sys
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from .config import FetcherSettings, load_config
from .datasource import FetchDiagnostics, FetchOutcome, FetchStatus, ProxyFallbackFetcher, ResultSource
from .mock import generate_result
from .store import ResultStore, merge_result
from .types import LotteryResult, RefreshInProgressError, Region

UNAVAILABLE_MESSAGE = "Live results unavailable; showing generated data"
LIVE_MESSAGE = "Latest results updated"


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


def build_fetcher(settings: Optional[FetcherSettings] = None) -> ProxyFallbackFetcher:
    return ProxyFallbackFetcher(settings or load_config())


async def fetch_lottery_results(
    region: Region | str,
    date: Optional[dt.date] = None,
    source: Optional[ResultSource] = None,
) -> Optional[LotteryResult]:
    """Return the live result for ``region`` on ``date`` (today by default), or ``None``."""
    region = Region.parse(region)
    date = date or dt.date.today()
    if source is not None:
        outcome = await source.fetch(region, date)
    else:
        fetcher = build_fetcher()
        try:
            outcome = await fetcher.fetch(region, date)
        finally:
            await fetcher.close()
    return outcome.result if outcome.available else None


@dataclass(frozen=True)
class RefreshOutcome:
    result: LotteryResult
    live: bool
    message: str
    diagnostics: Optional[FetchDiagnostics] = None


class ResultRefresher:
    """Acquire a result, fall back to generated data, and merge it into the store.

    Only one refresh per region runs at a time; a second caller gets
    ``RefreshInProgressError`` instead of racing the replace-by-date merge.
    """

    def __init__(
        self,
        store: ResultStore,
        source: ResultSource,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._source = source
        self._rng = rng
        self._locks: Dict[Region, threading.Lock] = {region: threading.Lock() for region in Region}
        self._logger = logger or logging.getLogger("xoso.refresh")

    async def refresh(self, region: Region | str, date: Optional[dt.date] = None) -> RefreshOutcome:
        region = Region.parse(region)
        date = date or dt.date.today()
        lock = self._locks[region]
        if not lock.acquire(blocking=False):
            raise RefreshInProgressError(f"Refresh already running for {region.value}")
        try:
            outcome = await self._acquire(region, date)
            if outcome.available:
                refreshed = RefreshOutcome(
                    result=outcome.result,
                    live=True,
                    message=LIVE_MESSAGE,
                    diagnostics=outcome.diagnostics,
                )
            else:
                self._logger.info(
                    "Using generated result for %s %s (%s)", region.value, date, outcome.status.value
                )
                refreshed = RefreshOutcome(
                    result=generate_result(region, date, self._rng),
                    live=False,
                    message=UNAVAILABLE_MESSAGE,
                    diagnostics=outcome.diagnostics,
                )
            collection = merge_result(self._store.get(region), refreshed.result)
            self._store.set(region, collection)
            return refreshed
        finally:
            lock.release()

    async def _acquire(self, region: Region, date: dt.date) -> FetchOutcome:
        try:
            return await self._source.fetch(region, date)
        except Exception as exc:
            self._logger.exception("Live source failed for %s %s: %s", region.value, date, exc)
            return FetchOutcome(status=FetchStatus.UNAVAILABLE, region=region, date=date)
