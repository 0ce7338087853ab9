from .parser import ResultParser, parse_result
from .rules import DEFAULT_RULES, ParserRules, TierRule

__all__ = [
    "DEFAULT_RULES",
    "ParserRules",
    "ResultParser",
    "TierRule",
    "parse_result",
]
