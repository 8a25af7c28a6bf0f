"""Data models shared by the resolver, probers and selector."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class ProbeOutcome(str, Enum):
    """Why a probe succeeded or failed."""

    OK = "ok"
    NOT_FOUND = "not_found"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    LOAD_FAILED = "load_failed"
    INVALID_URL = "invalid_url"


@dataclass(frozen=True)
class ProbeResult:
    """Reachability outcome for a single resolved URL."""

    url: str
    outcome: ProbeOutcome
    status_code: Optional[int] = None
    detail: Optional[str] = None

    @property
    def reachable(self) -> bool:
        return self.outcome is ProbeOutcome.OK

    def __bool__(self) -> bool:
        return self.reachable


@dataclass(frozen=True)
class ImageOptions:
    """Sizing hints accepted by ``optimized_url``; not applied yet."""

    width: Optional[int] = None
    height: Optional[int] = None
    quality: int = 80

    @classmethod
    def coerce(cls, options: Any) -> "ImageOptions":
        """Read sizing hints from ``options``; anything unrecognised yields defaults."""
        if isinstance(options, ImageOptions):
            return options
        if not isinstance(options, Mapping):
            return cls()
        return cls(
            width=options.get("width"),
            height=options.get("height"),
            quality=options.get("quality", 80),
        )
