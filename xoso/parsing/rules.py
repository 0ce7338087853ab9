"""Selectors and keyword variants for the result pages.

The target markup is owned by a third party and changes without notice, so
everything page-specific lives here as data.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..types import PRIZE_TIERS, PrizeTier, Region


@dataclass(frozen=True)
class TierRule:
    tier: PrizeTier
    css_classes: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()
    fixed_row: Optional[int] = None


@dataclass(frozen=True)
class ParserRules:
    region: Region
    tiers: Tuple[TierRule, ...]
    table_classes: Tuple[str, ...] = ("table-result", "kqmb", "extendable", "box_kqxs")
    table_id_templates: Tuple[str, ...] = ("kqngay_{compact}", "kq_{compact}")
    dated_id_templates: Tuple[str, ...] = ("result_{dashed}", "kqxs_{dashed}", "ngay_{compact}")
    tabular: bool = False
    min_html_length: int = 100

    def table_ids(self, date: dt.date) -> Tuple[str, ...]:
        return tuple(t.format(**_date_tokens(date)) for t in self.table_id_templates)

    def dated_ids(self, date: dt.date) -> Tuple[str, ...]:
        return tuple(t.format(**_date_tokens(date)) for t in self.dated_id_templates)


def _date_tokens(date: dt.date) -> Dict[str, str]:
    return {
        "compact": date.strftime("%d%m%Y"),
        "dashed": date.strftime("%d-%m-%Y"),
        "iso": date.isoformat(),
    }


# Keywords are matched against accent-stripped, lower-cased label text with
# dots removed, so "G.1", "Giải Nhất" and "giai nhat" all normalise cleanly.
_TIER_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "Special Prize": ("dac biet", "db", "special", "gdb"),
    "First Prize": ("giai nhat", "nhat", "g1", "first"),
    "Second Prize": ("giai nhi", "nhi", "g2", "second"),
    "Third Prize": ("giai ba", "g3", "third"),
    "Fourth Prize": ("giai tu", "g4", "fourth"),
    "Fifth Prize": ("giai nam", "g5", "fifth"),
    "Sixth Prize": ("giai sau", "g6", "sixth"),
    "Seventh Prize": ("giai bay", "g7", "seventh"),
    "Eighth Prize": ("giai tam", "g8", "eighth"),
}

_TIER_CLASSES: Dict[str, Tuple[str, ...]] = {
    "Special Prize": ("giaidb", "special-prize", "gdb"),
    "First Prize": ("giai1", "g1"),
    "Second Prize": ("giai2", "g2"),
    "Third Prize": ("giai3", "g3"),
    "Fourth Prize": ("giai4", "g4"),
    "Fifth Prize": ("giai5", "g5"),
    "Sixth Prize": ("giai6", "g6"),
    "Seventh Prize": ("giai7", "g7"),
    "Eighth Prize": ("giai8", "g8"),
}


def _tier_rules(region: Region) -> Tuple[TierRule, ...]:
    rules = []
    for index, tier in enumerate(PRIZE_TIERS[region]):
        rules.append(
            TierRule(
                tier=tier,
                css_classes=_TIER_CLASSES.get(tier.label, ()),
                keywords=_TIER_KEYWORDS.get(tier.label, ()),
                # Only the top tier is pinned to a row; it is always printed first.
                fixed_row=0 if index == 0 else None,
            )
        )
    return tuple(rules)


DEFAULT_RULES: Dict[Region, ParserRules] = {
    Region.NORTH: ParserRules(region=Region.NORTH, tiers=_tier_rules(Region.NORTH)),
    Region.CENTRAL: ParserRules(
        region=Region.CENTRAL,
        tiers=_tier_rules(Region.CENTRAL),
        table_classes=("table-result", "table-xsmt", "box_kqxs", "extendable"),
        tabular=True,
    ),
    Region.SOUTH: ParserRules(region=Region.SOUTH, tiers=_tier_rules(Region.SOUTH)),
}
