from __future__ import annotations

import asyncio
import datetime as dt
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

import requests

from ..parsing import ResultParser
from ..types import Region
from .base import (
    AttemptOutcome,
    AttemptRecord,
    FetchDiagnostics,
    FetchOutcome,
    FetchStatus,
    ResultSource,
)
from .relay import DecodeError, DecodeMode, RelaySpec

if TYPE_CHECKING:  # pragma: no cover
    from ..config import FetcherSettings


@dataclass(frozen=True)
class _Attempt:
    label: str
    url: str
    spec: RelaySpec


class ProxyFallbackFetcher(ResultSource):
    """Fetch a results page directly, then through each relay in order.

    Attempts run one after another; each has its own timeout and a failure
    only moves on to the next attempt. The first body that parses wins.
    """

    def __init__(
        self,
        settings: "FetcherSettings",
        parser: Optional[ResultParser] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings
        self._parser = parser or ResultParser()
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": settings.user_agent})
        self._logger = logger or logging.getLogger("xoso.fetcher")

    async def fetch(self, region: Region, date: dt.date) -> FetchOutcome:
        region = Region.parse(region)
        source = self._settings.source
        if not source.supports(region):
            self._logger.debug("No live source for region %s", region.value)
            return FetchOutcome(status=FetchStatus.UNSUPPORTED, region=region, date=date)
        return await asyncio.to_thread(self._fetch_sync, region, date, source.url_for(region, date))

    def _plan(self, source_url: str) -> List[_Attempt]:
        direct = RelaySpec(
            name="direct",
            endpoint="",
            mode=DecodeMode.RAW,
            timeout_seconds=self._settings.direct_timeout_seconds,
        )
        attempts = [_Attempt(label="direct", url=source_url, spec=direct)]
        for relay in self._settings.relays:
            attempts.append(_Attempt(label=relay.name, url=relay.request_url(source_url), spec=relay))
        return attempts

    def _fetch_sync(self, region: Region, date: dt.date, source_url: str) -> FetchOutcome:
        records: List[AttemptRecord] = []
        last_body: Optional[FetchDiagnostics] = None

        for attempt in self._plan(source_url):
            outcome, detail, body = self._retrieve(attempt)
            if body is not None:
                last_body = FetchDiagnostics(raw_body=body, source_label=attempt.label, url=attempt.url)
                result = self._parser.parse(body, region, date)
                if result is not None:
                    records.append(AttemptRecord(attempt.label, attempt.url, AttemptOutcome.PARSED))
                    self._logger.info("Live %s result for %s parsed from %s", region.value, date, attempt.label)
                    return FetchOutcome(
                        status=FetchStatus.LIVE,
                        region=region,
                        date=date,
                        result=result,
                        diagnostics=last_body,
                        attempts=records,
                    )
                outcome, detail = AttemptOutcome.PARSE_MISS, f"{len(body)} chars, no result structure"
                self._logger.info("%s returned a page that did not parse; trying next", attempt.label)
            records.append(AttemptRecord(attempt.label, attempt.url, outcome, detail))

        self._logger.warning(
            "All %s attempts failed for %s %s; live results unavailable",
            len(records),
            region.value,
            date,
        )
        return FetchOutcome(
            status=FetchStatus.UNAVAILABLE,
            region=region,
            date=date,
            diagnostics=last_body,
            attempts=records,
        )

    def _retrieve(self, attempt: _Attempt) -> Tuple[Optional[AttemptOutcome], str, Optional[str]]:
        try:
            resp = self._session.get(attempt.url, timeout=attempt.spec.timeout_seconds)
        except requests.RequestException as exc:
            self._logger.warning("%s request failed: %s", attempt.label, exc)
            return AttemptOutcome.TRANSPORT_ERROR, str(exc), None

        if not resp.ok:
            self._logger.warning("%s answered HTTP %s", attempt.label, resp.status_code)
            return AttemptOutcome.HTTP_STATUS, f"HTTP {resp.status_code}", None

        try:
            body = attempt.spec.decode(resp)
        except DecodeError as exc:
            self._logger.warning("%s payload could not be decoded: %s", attempt.label, exc)
            return AttemptOutcome.DECODE_ERROR, str(exc), None

        size = len(body.encode("utf-8"))
        if size < self._settings.min_body_bytes:
            self._logger.warning("%s body too short (%s bytes)", attempt.label, size)
            return AttemptOutcome.TOO_SHORT, f"{size} bytes", None
        return None, "", body

    async def close(self) -> None:
        self._session.close()
