from __future__ import annotations

import re
from typing import List, Optional, Sequence

from .base import (
    ExtractionStrategy,
    ParseContext,
    extract_numbers,
    row_cells,
    row_label,
    scope_tables,
    table_rows,
)
from .rules import TierRule


class FixedRowStrategy(ExtractionStrategy):
    """Read the tier from its pinned row, provided the row label agrees."""

    name = "fixed-row"

    def extract(self, context: ParseContext, rule: TierRule) -> Optional[List[str]]:
        if rule.fixed_row is None:
            return None
        for table in scope_tables(context):
            rows = table_rows(table)
            if len(rows) <= rule.fixed_row:
                continue
            row = rows[rule.fixed_row]
            label = row_label(row)
            if label and context.tier_for_label(label) not in (None, rule):
                continue
            numbers = extract_numbers(row_cells(row)[1:], rule.tier.digits)
            if numbers:
                return numbers
        return None


class KeywordRowStrategy(ExtractionStrategy):
    name = "keyword-row"

    def extract(self, context: ParseContext, rule: TierRule) -> Optional[List[str]]:
        found = False
        numbers: List[str] = []
        for table in scope_tables(context):
            for row in table_rows(table):
                if context.tier_for_label(row_label(row)) is not rule:
                    continue
                found = True
                numbers.extend(extract_numbers(row_cells(row)[1:], rule.tier.digits))
            if numbers:
                return numbers
        return numbers if found else None


class ClassMarkerStrategy(ExtractionStrategy):
    name = "class-marker"

    def extract(self, context: ParseContext, rule: TierRule) -> Optional[List[str]]:
        found = False
        for css_class in rule.css_classes:
            elements = context.scope.find_all(class_=css_class)
            if not elements:
                continue
            found = True
            numbers = extract_numbers(elements, rule.tier.digits)
            if numbers:
                return numbers
        return [] if found else None


class BodyRegexStrategy(ExtractionStrategy):
    """Last resort: exact-width digit runs anywhere in the document text."""

    name = "body-regex"

    def extract(self, context: ParseContext, rule: TierRule) -> Optional[List[str]]:
        digits = rule.tier.digits
        pattern = re.compile(r"(?<!\d)\d{%d}(?!\d)" % digits)
        matches = pattern.findall(context.body_text())
        return matches[: rule.tier.count] or None


STRUCTURAL_STRATEGIES: Sequence[ExtractionStrategy] = (
    FixedRowStrategy(),
    KeywordRowStrategy(),
    ClassMarkerStrategy(),
)
FALLBACK_STRATEGIES: Sequence[ExtractionStrategy] = (BodyRegexStrategy(),)
