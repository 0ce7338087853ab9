from __future__ import annotations

import abc
import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..types import LotteryResult, Region


class FetchStatus(str, Enum):
    LIVE = "live"
    UNAVAILABLE = "unavailable"
    UNSUPPORTED = "unsupported"


class AttemptOutcome(str, Enum):
    PARSED = "parsed"
    TRANSPORT_ERROR = "transport_error"
    HTTP_STATUS = "http_status"
    DECODE_ERROR = "decode_error"
    TOO_SHORT = "too_short"
    PARSE_MISS = "parse_miss"


@dataclass(frozen=True)
class AttemptRecord:
    source_label: str
    url: str
    outcome: AttemptOutcome
    detail: str = ""


@dataclass(frozen=True)
class FetchDiagnostics:
    """Raw body behind an outcome, returned instead of kept in module state."""

    raw_body: str
    source_label: str
    url: str


@dataclass(frozen=True)
class FetchOutcome:
    status: FetchStatus
    region: Region
    date: dt.date
    result: Optional[LotteryResult] = None
    diagnostics: Optional[FetchDiagnostics] = None
    attempts: List[AttemptRecord] = field(default_factory=list)

    @property
    def available(self) -> bool:
        return self.status is FetchStatus.LIVE and self.result is not None


class ResultSource(abc.ABC):
    """Abstract live result provider."""

    @abc.abstractmethod
    async def fetch(self, region: Region, date: dt.date) -> FetchOutcome:
        """Return the outcome of trying to acquire ``region``'s result for ``date``.

        Implementations must not raise for network or parse problems; those
        are reported through ``FetchOutcome.status`` and ``attempts``.
        """

    async def close(self) -> None:
        """Optional hook for sources holding connections."""
        return None
