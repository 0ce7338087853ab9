from __future__ import annotations

import datetime as dt
import json
from typing import Any, List

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ResultCollectionRecord(Base):
    """One row per region key holding its JSON-encoded result list."""

    __tablename__ = "result_collections"

    key = Column(String(64), primary_key=True)
    payload = Column(Text, nullable=False, default="[]")
    updated_at = Column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow, nullable=False)

    def set_results(self, results: List[dict[str, Any]]) -> None:
        self.payload = json.dumps(results, ensure_ascii=False)

    def get_results(self) -> List[dict[str, Any]]:
        return json.loads(self.payload or "[]")
