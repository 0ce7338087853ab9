from .base import AttemptOutcome, AttemptRecord, FetchDiagnostics, FetchOutcome, FetchStatus, ResultSource
from .http_fetcher import ProxyFallbackFetcher
from .relay import DEFAULT_RELAYS, DecodeMode, RelaySpec

__all__ = [
    "AttemptOutcome",
    "AttemptRecord",
    "DEFAULT_RELAYS",
    "DecodeMode",
    "FetchDiagnostics",
    "FetchOutcome",
    "FetchStatus",
    "ProxyFallbackFetcher",
    "RelaySpec",
    "ResultSource",
]
