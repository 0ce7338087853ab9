from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from xoso.config import FetcherSettings, load_from_environment


@dataclass(frozen=True)
class FlaskSettings:
    secret_key: str = "xoso-dev-secret"
    debug: bool = True


@dataclass(frozen=True)
class AppSettings:
    flask: FlaskSettings
    database_url: str
    live_fetch_enabled: bool
    fetcher: FetcherSettings


@lru_cache(maxsize=1)
def load_settings(dotenv_path: Optional[str] = None) -> AppSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    flask_settings = FlaskSettings(
        secret_key=os.getenv("FLASK_SECRET_KEY", "xoso-dev-secret"),
        debug=os.getenv("FLASK_DEBUG", "1") == "1",
    )

    return AppSettings(
        flask=flask_settings,
        database_url=os.getenv("DATABASE_URL", "sqlite:///xoso.db"),
        live_fetch_enabled=os.getenv("LIVE_FETCH_ENABLED", "1") == "1",
        fetcher=load_from_environment(),
    )
