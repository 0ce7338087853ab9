from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .types import LOCATIONS_TIER, PLACEHOLDER, LotteryResult


@dataclass(frozen=True)
class SearchMatch:
    tier: str
    number: str


def _prize_numbers(result: LotteryResult) -> Iterator[Tuple[str, str]]:
    for prize in result.prizes:
        if prize.tier == LOCATIONS_TIER:
            continue
        for number in prize.numbers:
            if number != PLACEHOLDER:
                yield prize.tier, number


def search_number_in_result(result: LotteryResult, search_number: str) -> List[SearchMatch]:
    search_number = search_number.strip()
    if not search_number:
        return []
    return [
        SearchMatch(tier=tier, number=number)
        for tier, number in _prize_numbers(result)
        if search_number in number
    ]


def is_winning_number(result: LotteryResult, ticket_number: str) -> bool:
    ticket_number = ticket_number.strip()
    if not ticket_number:
        return False
    return any(
        number == ticket_number or number.endswith(ticket_number)
        for _, number in _prize_numbers(result)
    )
