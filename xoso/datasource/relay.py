from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote


class DecodeMode(str, Enum):
    RAW = "raw"
    ENVELOPED = "enveloped"


class DecodeError(ValueError):
    pass


@dataclass(frozen=True)
class RelaySpec:
    """A forwarding service: ``GET {endpoint}{urlencode(source_url)}``."""

    name: str
    endpoint: str
    mode: DecodeMode = DecodeMode.RAW
    timeout_seconds: float = 10
    payload_field: str = "contents"

    def request_url(self, source_url: str) -> str:
        return f"{self.endpoint}{quote(source_url, safe='')}"

    def decode(self, response: Any) -> str:
        if self.mode is DecodeMode.RAW:
            return response.text or ""
        try:
            envelope = response.json()
        except ValueError as exc:
            raise DecodeError(f"{self.name} returned non-JSON envelope") from exc
        if not isinstance(envelope, dict):
            raise DecodeError(f"{self.name} envelope is not an object")
        body: Optional[Any] = envelope.get(self.payload_field)
        if not isinstance(body, str):
            raise DecodeError(f"{self.name} envelope has no '{self.payload_field}' text")
        return body


# Tried in this order.
KNOWN_RELAYS: Dict[str, RelaySpec] = {
    "allorigins": RelaySpec(
        name="allorigins",
        endpoint="https://api.allorigins.win/get?url=",
        mode=DecodeMode.ENVELOPED,
        timeout_seconds=15,
        payload_field="contents",
    ),
    "corsproxy": RelaySpec(
        name="corsproxy",
        endpoint="https://corsproxy.io/?",
        mode=DecodeMode.RAW,
        timeout_seconds=10,
    ),
    "codetabs": RelaySpec(
        name="codetabs",
        endpoint="https://api.codetabs.com/v1/proxy?quest=",
        mode=DecodeMode.RAW,
        timeout_seconds=12,
    ),
}

DEFAULT_RELAYS: Tuple[RelaySpec, ...] = tuple(KNOWN_RELAYS.values())
