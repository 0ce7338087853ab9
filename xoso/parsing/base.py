from __future__ import annotations

import abc
import re
import unicodedata
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .rules import TierRule

_DIGITS = re.compile(r"^\d+$")
_SEPARATORS = re.compile(r"[\s,;|/]+")


def normalize_label(text: str) -> str:
    """Lower-case, strip accents and punctuation dots from a row label."""
    text = text.replace("Đ", "D").replace("đ", "d")
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    stripped = stripped.lower().replace(".", "").replace(":", " ")
    return " ".join(stripped.split())


def fit_width(candidate: str, digits: int) -> Optional[str]:
    """Accept a digit string within one character of ``digits`` and pad it to width."""
    if not _DIGITS.match(candidate):
        return None
    if not digits - 1 <= len(candidate) <= digits + 1:
        return None
    return candidate.zfill(digits)[-digits:]


def leaf_texts(element: Tag) -> Iterator[str]:
    if element.find(True) is None:
        yield element.get_text(" ", strip=True)
        return
    for node in element.find_all(True):
        if node.find(True) is None:
            yield node.get_text(" ", strip=True)


def extract_numbers(elements: Iterable[Tag], digits: int) -> List[str]:
    numbers: List[str] = []
    for element in elements:
        for text in leaf_texts(element):
            for token in _SEPARATORS.split(text):
                fitted = fit_width(token, digits)
                if fitted is not None:
                    numbers.append(fitted)
    return numbers


def table_rows(table: Tag) -> List[Tag]:
    """Rows that carry data cells, ignoring rows of nested tables."""
    rows = []
    for row in table.find_all("tr"):
        if row.find_parent("table") is not table:
            continue
        if row.find("td") is None:
            continue
        rows.append(row)
    return rows


def scope_tables(context: "ParseContext") -> List[Tag]:
    if context.scope.name == "table":
        return [context.scope]
    return context.scope.find_all("table")


def row_cells(row: Tag) -> List[Tag]:
    return row.find_all(["td", "th"], recursive=False)


def row_label(row: Tag) -> str:
    cells = row_cells(row)
    if not cells:
        return ""
    return normalize_label(cells[0].get_text(" ", strip=True))


def keyword_score(label: str, rule: TierRule) -> int:
    """Length of the longest keyword of ``rule`` contained in ``label`` (0 if none)."""
    tokens = label.split()
    best = 0
    for keyword in rule.keywords:
        # short codes like "db" or "g1" only count as whole words
        if " " in keyword or len(keyword) > 3:
            hit = keyword in label
        else:
            hit = keyword in tokens
        if hit:
            best = max(best, len(keyword))
    return best


@dataclass
class ParseContext:
    soup: BeautifulSoup
    scope: Tag
    anchor: str
    tiers: List[TierRule]

    def tier_for_label(self, label: str) -> Optional[TierRule]:
        best_rule: Optional[TierRule] = None
        best_score = 0
        for rule in self.tiers:
            score = keyword_score(label, rule)
            if score > best_score:
                best_rule, best_score = rule, score
        return best_rule

    def body_text(self) -> str:
        root = self.soup.body or self.soup
        return root.get_text(" ", strip=True)


class ExtractionStrategy(abc.ABC):
    """One rung of the per-tier extraction ladder."""

    name: str = "strategy"

    @abc.abstractmethod
    def extract(self, context: ParseContext, rule: TierRule) -> Optional[List[str]]:
        """Return numbers found for ``rule``.

        ``None`` means the structure this strategy looks for is absent; an
        empty list means it was found but held no usable number.
        """
