from __future__ import annotations

import datetime as dt
import os
import pathlib
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

from .datasource.relay import DEFAULT_RELAYS, KNOWN_RELAYS, RelaySpec
from .types import Region

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


def _int_from_env(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    return int(value)


def _float_from_env(value: Optional[str], default: float) -> float:
    if value is None or value == "":
        return default
    return float(value)


def _relays_from_env(value: Optional[str]) -> Tuple[RelaySpec, ...]:
    if value is None or value.strip() == "":
        return DEFAULT_RELAYS
    relays = []
    for name in value.split(","):
        name = name.strip().lower()
        if not name:
            continue
        if name not in KNOWN_RELAYS:
            raise RuntimeError(f"Unknown relay in XOSO__RELAYS: {name}")
        relays.append(KNOWN_RELAYS[name])
    return tuple(relays)


@dataclass(frozen=True)
class SourceSettings:
    host: str = "xoso.com.vn"
    scheme: str = "https"
    path_templates: Dict[Region, str] = field(
        default_factory=lambda: {Region.NORTH: "xsmb-{date}.html"}
    )

    def supports(self, region: Region) -> bool:
        return region in self.path_templates

    def url_for(self, region: Region, date: dt.date) -> str:
        path = self.path_templates[region].format(date=date.strftime("%d-%m-%Y"))
        return f"{self.scheme}://{self.host}/{path}"


@dataclass(frozen=True)
class FetcherSettings:
    source: SourceSettings = field(default_factory=SourceSettings)
    direct_timeout_seconds: float = 5
    min_body_bytes: int = 200
    relays: Tuple[RelaySpec, ...] = DEFAULT_RELAYS
    user_agent: str = DEFAULT_USER_AGENT


def load_from_environment() -> FetcherSettings:
    source = SourceSettings(
        host=os.getenv("XOSO__SOURCE_HOST", "xoso.com.vn"),
        scheme=os.getenv("XOSO__SOURCE_SCHEME", "https"),
    )
    return FetcherSettings(
        source=source,
        direct_timeout_seconds=_float_from_env(os.getenv("XOSO__DIRECT_TIMEOUT_SECONDS"), 5),
        min_body_bytes=_int_from_env(os.getenv("XOSO__MIN_BODY_BYTES"), 200),
        relays=_relays_from_env(os.getenv("XOSO__RELAYS")),
        user_agent=os.getenv("XOSO__USER_AGENT", DEFAULT_USER_AGENT),
    )


@lru_cache(maxsize=1)
def load_config(dotenv_path: Optional[str] = None) -> FetcherSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        default_path = pathlib.Path(".env")
        if default_path.exists():
            load_dotenv(default_path)
    return load_from_environment()
