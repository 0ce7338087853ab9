from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class PrizeResponse(BaseModel):
    tier: str
    numbers: List[str]
    amount: Optional[int] = None


class RegionResponse(BaseModel):
    region: str
    name: str
    english_name: str
    draw_time: str


class LotteryResultResponse(BaseModel):
    id: str
    region: str
    date: str
    drawTime: str
    prizes: List[PrizeResponse]
    locations: Optional[List[str]] = None


class RefreshRequest(BaseModel):
    date: Optional[str] = Field(None, description="ISO date of the draw; defaults to today.")


class RefreshResponse(BaseModel):
    result: LotteryResultResponse
    live: bool
    message: str
    source: Optional[str] = None
    raw_length: Optional[int] = None


class SearchRequest(BaseModel):
    number: str = Field(..., description="Ticket digits to look for.")
    date: Optional[str] = None

    @field_validator("number")
    @classmethod
    def validate_number(cls, value: str) -> str:
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            raise ValueError("Search number must contain digits only.")
        if len(value) > 6:
            raise ValueError("Search number must be at most 6 digits.")
        return value


class SearchMatchResponse(BaseModel):
    tier: str
    number: str


class SearchResponse(BaseModel):
    result_id: str
    number: str
    matches: List[SearchMatchResponse]
    is_winner: bool
