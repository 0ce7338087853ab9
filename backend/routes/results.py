from __future__ import annotations

import asyncio
import datetime as dt
from functools import lru_cache
from typing import Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from xoso.datasource import FetchOutcome, FetchStatus, ProxyFallbackFetcher, ResultSource
from xoso.search import is_winning_number, search_number_in_result
from xoso.service import ResultRefresher
from xoso.store import find_by_date, seed_history
from xoso.types import DRAW_TIMES, LotteryResult, RefreshInProgressError, Region, UnsupportedRegionError

from ..config import load_settings
from ..schemas import (
    LotteryResultResponse,
    RefreshRequest,
    RefreshResponse,
    RegionResponse,
    SearchMatchResponse,
    SearchRequest,
    SearchResponse,
)
from ..services.results import SqlResultStore

bp = Blueprint("results", __name__)
result_store = SqlResultStore()


class DisabledSource(ResultSource):
    async def fetch(self, region, date) -> FetchOutcome:
        return FetchOutcome(status=FetchStatus.UNSUPPORTED, region=region, date=date)


@lru_cache(maxsize=1)
def get_fetcher() -> ResultSource:
    settings = load_settings()
    if not settings.live_fetch_enabled:
        return DisabledSource()
    return ProxyFallbackFetcher(settings.fetcher)


@lru_cache(maxsize=1)
def get_refresher() -> ResultRefresher:
    return ResultRefresher(result_store, get_fetcher())


def _serialize(result: LotteryResult) -> dict:
    return LotteryResultResponse(**result.to_dict()).model_dump(exclude_none=True)


def _parse_date(value: Optional[str]) -> Optional[dt.date]:
    if value in (None, ""):
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid date: {value!r}; expected YYYY-MM-DD") from exc


@bp.errorhandler(UnsupportedRegionError)
def handle_unknown_region(exc: UnsupportedRegionError):
    return jsonify({"error": str(exc)}), 404


@bp.errorhandler(ValidationError)
def handle_validation_error(exc: ValidationError):
    details = exc.errors(include_url=False, include_context=False)
    return jsonify({"error": "invalid request", "details": details}), 400


@bp.errorhandler(ValueError)
def handle_value_error(exc: ValueError):
    return jsonify({"error": str(exc)}), 400


@bp.get("/")
def list_regions():
    regions = [
        RegionResponse(
            region=region.value,
            name=region.display_name,
            english_name=region.english_name,
            draw_time=DRAW_TIMES[region],
        ).model_dump()
        for region in Region
    ]
    return jsonify(regions)


@bp.get("/<region>")
def list_results(region: str):
    collection = seed_history(result_store, Region.parse(region))
    return jsonify([_serialize(result) for result in collection])


@bp.get("/<region>/<date>")
def get_result(region: str, date: str):
    collection = seed_history(result_store, Region.parse(region))
    result = find_by_date(collection, _parse_date(date))
    if result is None:
        return jsonify({"error": "no result for this date"}), 404
    return jsonify(_serialize(result))


@bp.post("/<region>/refresh")
def refresh_results(region: str):
    region_key = Region.parse(region)
    seed_history(result_store, region_key)
    payload = request.get_json(force=True, silent=True) or {}
    if not isinstance(payload, dict):
        payload = {}
    data = RefreshRequest(**payload)
    draw_date = _parse_date(data.date)

    try:
        outcome = asyncio.run(get_refresher().refresh(region_key, draw_date))
    except RefreshInProgressError as exc:
        return jsonify({"error": str(exc)}), 409

    if not outcome.live:
        current_app.logger.info("Serving generated %s result for %s", region_key.value, outcome.result.date)

    diagnostics = outcome.diagnostics
    response = RefreshResponse(
        result=LotteryResultResponse(**outcome.result.to_dict()),
        live=outcome.live,
        message=outcome.message,
        source=diagnostics.source_label if diagnostics else None,
        raw_length=len(diagnostics.raw_body) if diagnostics else None,
    )
    return jsonify(response.model_dump(exclude_none=True))


@bp.get("/<region>/search")
def search_results(region: str):
    collection = seed_history(result_store, Region.parse(region))
    data = SearchRequest(number=request.args.get("number", ""), date=request.args.get("date"))
    draw_date = _parse_date(data.date)

    result = find_by_date(collection, draw_date) if draw_date else (collection[0] if collection else None)
    if result is None:
        return jsonify({"error": "no result for this date"}), 404

    matches = search_number_in_result(result, data.number)
    response = SearchResponse(
        result_id=result.id,
        number=data.number,
        matches=[SearchMatchResponse(tier=m.tier, number=m.number) for m in matches],
        is_winner=is_winning_number(result, data.number),
    )
    return jsonify(response.model_dump())
