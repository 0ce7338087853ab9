import datetime as dt
import random
import unittest

from xoso.mock import generate_history, generate_result
from xoso.store import InMemoryResultStore, find_by_date, merge_result, seed_history
from xoso.types import RETENTION_WINDOW, LotteryResult, Region


class MergeResultTests(unittest.TestCase):
    def setUp(self) -> None:
        self.today = dt.date(2024, 1, 15)
        self.rng = random.Random(3)

    def test_same_date_replaces_in_place(self) -> None:
        collection = generate_history(Region.NORTH, 5, rng=self.rng, today=self.today)
        replacement = generate_result(Region.NORTH, self.today - dt.timedelta(days=2), self.rng)

        merged = merge_result(collection, replacement)

        self.assertEqual(len(merged), 5)
        self.assertIs(merged[2], replacement)
        self.assertEqual([r.date for r in merged], [r.date for r in collection])

    def test_new_date_is_prepended(self) -> None:
        collection = generate_history(Region.NORTH, 5, rng=self.rng, today=self.today)
        newer = generate_result(Region.NORTH, self.today + dt.timedelta(days=1), self.rng)

        merged = merge_result(collection, newer)

        self.assertEqual(len(merged), 6)
        self.assertIs(merged[0], newer)

    def test_full_collection_drops_oldest(self) -> None:
        collection = generate_history(Region.SOUTH, RETENTION_WINDOW, rng=self.rng, today=self.today)
        newer = generate_result(Region.SOUTH, self.today + dt.timedelta(days=1), self.rng)

        merged = merge_result(collection, newer)

        self.assertEqual(len(merged), RETENTION_WINDOW)
        self.assertIs(merged[0], newer)
        self.assertNotIn(collection[-1], merged)
        self.assertEqual(merged[-1], collection[-2])

    def test_older_date_is_inserted_in_date_order(self) -> None:
        collection = generate_history(Region.NORTH, 5, rng=self.rng, today=self.today)
        gap = [r for r in collection if r.date != self.today - dt.timedelta(days=2)]
        older = generate_result(Region.NORTH, self.today - dt.timedelta(days=2), self.rng)

        merged = merge_result(gap, older)

        self.assertIs(merged[2], older)
        self.assertEqual([r.date for r in merged], [r.date for r in collection])

    def test_date_older_than_history_goes_last(self) -> None:
        collection = generate_history(Region.NORTH, 5, rng=self.rng, today=self.today)
        ancient = generate_result(Region.NORTH, dt.date(2023, 6, 1), self.rng)

        merged = merge_result(collection, ancient)

        self.assertEqual(merged[0].date, self.today)
        self.assertIs(merged[-1], ancient)
        dates = [r.date for r in merged]
        self.assertEqual(dates, sorted(dates, reverse=True))

    def test_old_date_into_full_collection_keeps_newest(self) -> None:
        collection = generate_history(Region.SOUTH, RETENTION_WINDOW, rng=self.rng, today=self.today)
        ancient = generate_result(Region.SOUTH, dt.date(2023, 6, 1), self.rng)

        merged = merge_result(collection, ancient)

        self.assertEqual(merged, collection)

    def test_input_collection_is_not_mutated(self) -> None:
        collection = generate_history(Region.SOUTH, 3, rng=self.rng, today=self.today)
        snapshot = list(collection)

        merge_result(collection, generate_result(Region.SOUTH, self.today, self.rng))

        self.assertEqual(collection, snapshot)


class StoreTests(unittest.TestCase):
    def test_in_memory_store_round_trips_by_region(self) -> None:
        store = InMemoryResultStore()
        history = generate_history(Region.CENTRAL, 2)

        store.set(Region.CENTRAL, history)

        self.assertEqual(store.get("central"), history)
        self.assertEqual(store.get(Region.NORTH), [])

    def test_seed_history_only_fills_empty_regions(self) -> None:
        store = InMemoryResultStore()
        existing = [generate_result(Region.NORTH, dt.date(2024, 1, 1))]
        store.set(Region.NORTH, existing)

        self.assertEqual(seed_history(store, Region.NORTH), existing)
        seeded = seed_history(store, Region.SOUTH)

        self.assertEqual(len(seeded), RETENTION_WINDOW)
        self.assertEqual(store.get(Region.SOUTH), seeded)

    def test_find_by_date(self) -> None:
        history = generate_history(Region.NORTH, 3, today=dt.date(2024, 1, 15))

        found = find_by_date(history, dt.date(2024, 1, 14))

        self.assertIsInstance(found, LotteryResult)
        self.assertEqual(found.id, "north-2024-01-14")
        self.assertIsNone(find_by_date(history, dt.date(2023, 1, 1)))

    def test_result_dict_round_trip_keeps_locations(self) -> None:
        result = LotteryResult.from_dict(
            {
                "region": "central",
                "date": "2024-01-15",
                "prizes": [{"tier": "Locations", "numbers": ["Huế", "Phú Yên"]}],
                "locations": ["Huế", "Phú Yên"],
            }
        )

        payload = result.to_dict()

        self.assertEqual(payload["id"], "central-2024-01-15")
        self.assertEqual(payload["drawTime"], "16:30")
        self.assertEqual(payload["locations"], ["Huế", "Phú Yên"])
        self.assertEqual(LotteryResult.from_dict(payload), result)


if __name__ == "__main__":
    unittest.main()
