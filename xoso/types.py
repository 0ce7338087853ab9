from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

PLACEHOLDER = "-"
LOCATIONS_TIER = "Locations"
RETENTION_WINDOW = 30


class XosoError(Exception):
    """Base error for the results package."""


class UnsupportedRegionError(XosoError, ValueError):
    pass


class RefreshInProgressError(XosoError):
    pass


class Region(str, Enum):
    NORTH = "north"
    CENTRAL = "central"
    SOUTH = "south"

    @classmethod
    def parse(cls, value: "Region | str") -> "Region":
        if isinstance(value, Region):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise UnsupportedRegionError(f"Unknown region: {value!r}") from exc

    @property
    def display_name(self) -> str:
        return REGION_NAMES[self][0]

    @property
    def english_name(self) -> str:
        return REGION_NAMES[self][1]


REGION_NAMES: Dict[Region, Tuple[str, str]] = {
    Region.NORTH: ("Miền Bắc", "Northern"),
    Region.CENTRAL: ("Miền Trung", "Central"),
    Region.SOUTH: ("Miền Nam", "Southern"),
}


DRAW_TIMES: Dict[Region, str] = {
    Region.NORTH: "18:15",
    Region.CENTRAL: "16:30",
    Region.SOUTH: "16:30",
}


@dataclass(frozen=True)
class PrizeTier:
    name: str
    label: str
    count: int
    digits: int


PRIZE_TIERS: Dict[Region, Tuple[PrizeTier, ...]] = {
    Region.NORTH: (
        PrizeTier("Giải Đặc Biệt", "Special Prize", 1, 5),
        PrizeTier("Giải Nhất", "First Prize", 1, 5),
        PrizeTier("Giải Nhì", "Second Prize", 2, 5),
        PrizeTier("Giải Ba", "Third Prize", 6, 5),
        PrizeTier("Giải Tư", "Fourth Prize", 4, 4),
        PrizeTier("Giải Năm", "Fifth Prize", 6, 4),
        PrizeTier("Giải Sáu", "Sixth Prize", 3, 3),
        PrizeTier("Giải Bảy", "Seventh Prize", 4, 2),
    ),
    Region.CENTRAL: (
        PrizeTier("Giải Đặc Biệt", "Special Prize", 1, 6),
        PrizeTier("Giải Nhất", "First Prize", 1, 6),
        PrizeTier("Giải Nhì", "Second Prize", 2, 6),
        PrizeTier("Giải Ba", "Third Prize", 6, 6),
        PrizeTier("Giải Tư", "Fourth Prize", 4, 5),
        PrizeTier("Giải Năm", "Fifth Prize", 6, 5),
        PrizeTier("Giải Sáu", "Sixth Prize", 3, 4),
        PrizeTier("Giải Bảy", "Seventh Prize", 4, 3),
        PrizeTier("Giải Tám", "Eighth Prize", 1, 2),
    ),
    Region.SOUTH: (
        PrizeTier("Giải Đặc Biệt", "Special Prize", 1, 6),
        PrizeTier("Giải Nhất", "First Prize", 1, 5),
        PrizeTier("Giải Nhì", "Second Prize", 1, 5),
        PrizeTier("Giải Ba", "Third Prize", 2, 5),
        PrizeTier("Giải Tư", "Fourth Prize", 7, 4),
        PrizeTier("Giải Năm", "Fifth Prize", 1, 4),
        PrizeTier("Giải Sáu", "Sixth Prize", 3, 3),
        PrizeTier("Giải Bảy", "Seventh Prize", 1, 2),
        PrizeTier("Giải Tám", "Eighth Prize", 1, 2),
    ),
}


def result_id(region: Region, date: dt.date) -> str:
    return f"{Region.parse(region).value}-{date.isoformat()}"


@dataclass(frozen=True)
class Prize:
    tier: str
    numbers: Tuple[str, ...]
    amount: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"tier": self.tier, "numbers": list(self.numbers)}
        if self.amount is not None:
            data["amount"] = self.amount
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Prize":
        return cls(
            tier=str(data["tier"]),
            numbers=tuple(str(n) for n in data.get("numbers", ())),
            amount=data.get("amount"),
        )


@dataclass(frozen=True)
class LotteryResult:
    """One draw for one region and calendar date."""

    id: str
    region: Region
    date: dt.date
    draw_time: str
    prizes: Tuple[Prize, ...]
    locations: Optional[Tuple[str, ...]] = field(default=None)

    @classmethod
    def build(
        cls,
        region: Region,
        date: dt.date,
        prizes: Sequence[Prize],
        locations: Optional[Sequence[str]] = None,
    ) -> "LotteryResult":
        region = Region.parse(region)
        return cls(
            id=result_id(region, date),
            region=region,
            date=date,
            draw_time=DRAW_TIMES[region],
            prizes=tuple(prizes),
            locations=tuple(locations) if locations is not None else None,
        )

    def prize_for(self, tier: str) -> Optional[Prize]:
        for prize in self.prizes:
            if prize.tier == tier:
                return prize
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "region": self.region.value,
            "date": self.date.isoformat(),
            "drawTime": self.draw_time,
            "prizes": [prize.to_dict() for prize in self.prizes],
        }
        if self.locations is not None:
            data["locations"] = list(self.locations)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LotteryResult":
        region = Region.parse(data["region"])
        date = dt.date.fromisoformat(str(data["date"]))
        locations = data.get("locations")
        return cls(
            id=str(data.get("id") or result_id(region, date)),
            region=region,
            date=date,
            draw_time=str(data.get("drawTime") or DRAW_TIMES[region]),
            prizes=tuple(Prize.from_dict(p) for p in data.get("prizes", ())),
            locations=tuple(str(loc) for loc in locations) if locations is not None else None,
        )
