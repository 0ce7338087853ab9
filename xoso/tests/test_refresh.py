import asyncio
import datetime as dt
import random
import unittest

from xoso.datasource import FetchDiagnostics, FetchOutcome, FetchStatus, ResultSource
from xoso.mock import generate_history, generate_result
from xoso.service import LIVE_MESSAGE, UNAVAILABLE_MESSAGE, ResultRefresher
from xoso.store import InMemoryResultStore
from xoso.types import RefreshInProgressError, Region

DRAW_DATE = dt.date(2024, 1, 15)


class FakeSource(ResultSource):
    def __init__(self, outcome=None, error=None) -> None:
        self.outcome = outcome
        self.error = error
        self.calls = 0

    async def fetch(self, region, date):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.outcome or FetchOutcome(FetchStatus.UNAVAILABLE, region, date)


class ReentrantSource(ResultSource):
    """Starts a second refresh of the same region while the first is running."""

    def __init__(self) -> None:
        self.refresher = None
        self.inner_error = None

    async def fetch(self, region, date):
        try:
            await self.refresher.refresh(region, date)
        except RefreshInProgressError as exc:
            self.inner_error = exc
        return FetchOutcome(FetchStatus.UNAVAILABLE, region, date)


class ResultRefresherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryResultStore()
        self.store.set(Region.NORTH, generate_history(Region.NORTH, 3, today=DRAW_DATE))

    def test_live_result_replaces_same_date_entry(self) -> None:
        live = generate_result(Region.NORTH, DRAW_DATE, random.Random(1))
        diagnostics = FetchDiagnostics(raw_body="<html/>", source_label="direct", url="https://x")
        source = FakeSource(
            FetchOutcome(FetchStatus.LIVE, Region.NORTH, DRAW_DATE, result=live, diagnostics=diagnostics)
        )
        refresher = ResultRefresher(self.store, source)

        outcome = asyncio.run(refresher.refresh(Region.NORTH, DRAW_DATE))

        self.assertTrue(outcome.live)
        self.assertEqual(outcome.message, LIVE_MESSAGE)
        self.assertIs(outcome.diagnostics, diagnostics)
        collection = self.store.get(Region.NORTH)
        self.assertEqual(len(collection), 3)
        self.assertIs(collection[0], live)

    def test_unavailable_falls_back_to_generated_result(self) -> None:
        refresher = ResultRefresher(self.store, FakeSource(), rng=random.Random(5))

        outcome = asyncio.run(refresher.refresh("north", DRAW_DATE + dt.timedelta(days=1)))

        self.assertFalse(outcome.live)
        self.assertEqual(outcome.message, UNAVAILABLE_MESSAGE)
        self.assertEqual(outcome.result, generate_result(Region.NORTH, DRAW_DATE + dt.timedelta(days=1), random.Random(5)))
        self.assertEqual(len(self.store.get(Region.NORTH)), 4)

    def test_source_exception_is_treated_as_unavailable(self) -> None:
        refresher = ResultRefresher(self.store, FakeSource(error=RuntimeError("boom")))

        outcome = asyncio.run(refresher.refresh(Region.SOUTH, DRAW_DATE))

        self.assertFalse(outcome.live)
        self.assertEqual(self.store.get(Region.SOUTH), [outcome.result])

    def test_concurrent_refresh_of_same_region_is_rejected(self) -> None:
        source = ReentrantSource()
        refresher = ResultRefresher(self.store, source)
        source.refresher = refresher

        outcome = asyncio.run(refresher.refresh(Region.NORTH, DRAW_DATE))

        self.assertIsInstance(source.inner_error, RefreshInProgressError)
        self.assertFalse(outcome.live)
        self.assertEqual(len(self.store.get(Region.NORTH)), 3)


if __name__ == "__main__":
    unittest.main()
