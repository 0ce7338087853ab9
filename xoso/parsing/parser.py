from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Mapping, Optional, Sequence

from bs4 import BeautifulSoup

from ..types import PLACEHOLDER, LotteryResult, Prize, Region
from .base import ExtractionStrategy, ParseContext, scope_tables
from .rules import DEFAULT_RULES, ParserRules
from .strategies import FALLBACK_STRATEGIES, STRUCTURAL_STRATEGIES
from .tabular import parse_location_table

logger = logging.getLogger("xoso.parsing")


class ResultParser:
    """Turn a results page into a ``LotteryResult``.

    ``parse`` never raises; it returns ``None`` when the page is too short,
    has no recognisable anchor, or no tier yields a number.
    """

    def __init__(
        self,
        rules: Optional[Mapping[Region, ParserRules]] = None,
        structural: Sequence[ExtractionStrategy] = STRUCTURAL_STRATEGIES,
        fallback: Sequence[ExtractionStrategy] = FALLBACK_STRATEGIES,
        features: str = "lxml",
    ) -> None:
        self._rules: Dict[Region, ParserRules] = dict(rules or DEFAULT_RULES)
        self._structural = tuple(structural)
        self._fallback = tuple(fallback)
        self._features = features

    def parse(self, html: Optional[str], region: Region | str, date: dt.date) -> Optional[LotteryResult]:
        region = Region.parse(region)
        rules = self._rules[region]
        if not html or len(html.strip()) < rules.min_html_length:
            logger.debug("Body too short to parse (%s chars)", len(html or ""))
            return None
        try:
            return self._parse(html, rules, date)
        except Exception as exc:
            logger.warning("Parser failed on %s page for %s: %s", region.value, date, exc)
            return None

    def _parse(self, html: str, rules: ParserRules, date: dt.date) -> Optional[LotteryResult]:
        soup = BeautifulSoup(html, self._features)
        context = self._locate_anchor(soup, rules, date)
        if context is None:
            logger.info("No result anchor found for %s %s", rules.region.value, date)
            return None

        if rules.tabular:
            for table in scope_tables(context):
                result = parse_location_table(context, table, rules, date)
                if result is not None:
                    return result
            logger.info("Location table not usable; trying per-tier extraction")

        prizes: List[Prize] = []
        populated = 0
        for rule in rules.tiers:
            numbers = self._extract_tier(context, rule)
            if numbers:
                populated += 1
                padded = list(numbers[: rule.tier.count])
                padded.extend(PLACEHOLDER for _ in range(rule.tier.count - len(padded)))
            else:
                padded = [PLACEHOLDER] * rule.tier.count
            prizes.append(Prize(tier=rule.tier.label, numbers=tuple(padded)))

        if populated == 0:
            logger.info("Anchor %s found but no tier produced numbers", context.anchor)
            return None
        logger.debug("Parsed %s/%s tiers via %s anchor", populated, len(rules.tiers), context.anchor)
        return LotteryResult.build(rules.region, date, prizes)

    def _extract_tier(self, context: ParseContext, rule) -> List[str]:
        located = False
        for strategy in self._structural:
            numbers = strategy.extract(context, rule)
            if numbers:
                return numbers
            located = located or numbers is not None
        if located:
            # the tier is on the page but empty; keep its slots as placeholders
            return []
        for strategy in self._fallback:
            numbers = strategy.extract(context, rule)
            if numbers:
                logger.debug("%s filled by %s", rule.tier.label, strategy.name)
                return numbers
        return []

    def _locate_anchor(self, soup: BeautifulSoup, rules: ParserRules, date: dt.date) -> Optional[ParseContext]:
        tiers = list(rules.tiers)
        for table_id in rules.table_ids(date):
            table = soup.find("table", id=table_id)
            if table is not None:
                return ParseContext(soup=soup, scope=table, anchor="table-id", tiers=tiers)
        for css_class in rules.table_classes:
            table = soup.find("table", class_=css_class)
            if table is not None:
                return ParseContext(soup=soup, scope=table, anchor="table-class", tiers=tiers)
        for rule in rules.tiers:
            for css_class in rule.css_classes:
                if soup.find(class_=css_class) is not None:
                    return ParseContext(soup=soup, scope=soup, anchor="tier-class", tiers=tiers)
        for element_id in rules.dated_ids(date):
            element = soup.find(id=element_id)
            if element is not None:
                return ParseContext(soup=soup, scope=element, anchor="dated-id", tiers=tiers)
        return None


_default_parser = ResultParser()


def parse_result(html: Optional[str], region: Region | str, date: dt.date) -> Optional[LotteryResult]:
    return _default_parser.parse(html, region, date)
