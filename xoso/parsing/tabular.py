from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from bs4.element import Tag

from ..types import LOCATIONS_TIER, PLACEHOLDER, LotteryResult, Prize
from .base import ParseContext, extract_numbers, row_cells, row_label
from .rules import ParserRules, TierRule

logger = logging.getLogger("xoso.parsing.tabular")


def _header_row(table: Tag) -> Optional[Tag]:
    rows = [row for row in table.find_all("tr") if row.find_parent("table") is table]
    for row in rows:
        if row.find_parent("thead") is not None:
            return row
    # without a <thead> the first row doubles as the header
    return rows[0] if rows else None


def _location_columns(table: Tag) -> List[Tuple[int, str]]:
    """Header cell index and name for every named location column."""
    header = _header_row(table)
    if header is None:
        return []
    columns = []
    for index, cell in enumerate(row_cells(header)):
        name = cell.get_text(" ", strip=True)
        if index > 0 and name:
            columns.append((index, name))
    return columns


def parse_location_table(
    context: ParseContext, table: Tag, rules: ParserRules, date: dt.date
) -> Optional[LotteryResult]:
    """Pivot a tier-by-location table into one Prize per tier.

    The first prize is a synthetic "Locations" row naming the columns. Every
    other prize holds ``width`` slots per location, in column order, where
    ``width`` is the largest count seen in any column for that tier (capped at
    the tier's count); missing slots are filled with the placeholder.
    """
    location_columns = _location_columns(table)
    if not location_columns:
        return None
    header = _header_row(table)
    locations = [name for _, name in location_columns]

    by_tier: Dict[str, List[List[str]]] = {}
    for row in table.find_all("tr"):
        if row is header or row.find_parent("table") is not table:
            continue
        rule = context.tier_for_label(row_label(row))
        if rule is None or rule.tier.label in by_tier:
            continue
        cells = row_cells(row)
        columns = [
            extract_numbers([cells[index]], rule.tier.digits) if index < len(cells) else []
            for index, _ in location_columns
        ]
        by_tier[rule.tier.label] = columns

    if not any(any(columns) for columns in by_tier.values()):
        return None

    prizes = [Prize(tier=LOCATIONS_TIER, numbers=tuple(locations))]
    for rule in rules.tiers:
        columns = by_tier.get(rule.tier.label)
        if columns is None:
            continue
        prizes.append(Prize(tier=rule.tier.label, numbers=_pivot(columns, rule)))

    logger.debug("Parsed %s tiers across %s locations", len(prizes) - 1, len(locations))
    return LotteryResult.build(rules.region, date, prizes, locations=locations)


def _pivot(columns: Sequence[List[str]], rule: TierRule) -> tuple:
    width = max(1, min(rule.tier.count, max(len(c) for c in columns)))
    numbers: List[str] = []
    for column in columns:
        slots = column[:width]
        numbers.extend(slots)
        numbers.extend(PLACEHOLDER for _ in range(width - len(slots)))
    return tuple(numbers)
