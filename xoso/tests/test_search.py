import datetime as dt
import unittest

from xoso.search import SearchMatch, is_winning_number, search_number_in_result
from xoso.types import LOCATIONS_TIER, PLACEHOLDER, LotteryResult, Prize, Region


def _result() -> LotteryResult:
    return LotteryResult.build(
        Region.NORTH,
        dt.date(2024, 1, 15),
        [
            Prize("Special Prize", ("12345",)),
            Prize("First Prize", ("45678",)),
            Prize("Seventh Prize", ("45", PLACEHOLDER, "09", "11")),
        ],
    )


class SearchTests(unittest.TestCase):
    def test_substring_matches_in_prize_order(self) -> None:
        matches = search_number_in_result(_result(), "45")

        self.assertEqual(
            matches,
            [
                SearchMatch("Special Prize", "12345"),
                SearchMatch("First Prize", "45678"),
                SearchMatch("Seventh Prize", "45"),
            ],
        )

    def test_blank_search_and_placeholders_never_match(self) -> None:
        self.assertEqual(search_number_in_result(_result(), "  "), [])
        self.assertEqual(search_number_in_result(_result(), PLACEHOLDER), [])

    def test_location_header_row_is_not_searched(self) -> None:
        result = LotteryResult.build(
            Region.CENTRAL,
            dt.date(2024, 1, 15),
            [Prize(LOCATIONS_TIER, ("Huế 1",)), Prize("Eighth Prize", ("21",))],
            locations=["Huế 1"],
        )

        self.assertEqual(search_number_in_result(result, "1"), [SearchMatch("Eighth Prize", "21")])

    def test_winning_number_exact_or_suffix(self) -> None:
        result = _result()

        self.assertTrue(is_winning_number(result, "12345"))
        self.assertTrue(is_winning_number(result, "345"))
        self.assertFalse(is_winning_number(result, "123"))
        self.assertFalse(is_winning_number(result, ""))


if __name__ == "__main__":
    unittest.main()
