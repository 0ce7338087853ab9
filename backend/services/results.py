from __future__ import annotations

from typing import List, Sequence

from xoso.types import LotteryResult, Region

from ..db import session_scope
from ..models import ResultCollectionRecord


def collection_key(region: Region) -> str:
    return f"lottery-{Region.parse(region).value}-results"


class SqlResultStore:
    """Result store keeping each region's collection as one JSON row."""

    def get(self, region: Region) -> List[LotteryResult]:
        with session_scope() as session:
            record = session.get(ResultCollectionRecord, collection_key(region))
            if record is None:
                return []
            return [LotteryResult.from_dict(item) for item in record.get_results()]

    def set(self, region: Region, collection: Sequence[LotteryResult]) -> None:
        key = collection_key(region)
        with session_scope() as session:
            record = session.get(ResultCollectionRecord, key)
            if record is None:
                record = ResultCollectionRecord(key=key)
                session.add(record)
            record.set_results([result.to_dict() for result in collection])
            session.flush()
