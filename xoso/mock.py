from __future__ import annotations

import datetime as dt
import random
from typing import List, Optional

from .types import PRIZE_TIERS, LotteryResult, Prize, Region


def generate_lottery_number(digits: int, rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return str(rng.randrange(10 ** digits)).zfill(digits)


def generate_result(
    region: Region | str, date: dt.date, rng: Optional[random.Random] = None
) -> LotteryResult:
    """Return a random but correctly shaped result for ``region`` on ``date``.

    Pass a seeded ``random.Random`` when the numbers must be reproducible.
    """
    region = Region.parse(region)
    prizes = [
        Prize(
            tier=tier.label,
            numbers=tuple(generate_lottery_number(tier.digits, rng) for _ in range(tier.count)),
        )
        for tier in PRIZE_TIERS[region]
    ]
    return LotteryResult.build(region, date, prizes)


def generate_history(
    region: Region | str,
    days: int = 30,
    rng: Optional[random.Random] = None,
    today: Optional[dt.date] = None,
) -> List[LotteryResult]:
    start = today or dt.date.today()
    return [generate_result(region, start - dt.timedelta(days=offset), rng) for offset in range(days)]
