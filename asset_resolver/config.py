"""Configuration objects and constants for asset URL resolution."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Mapping, Optional

logger = logging.getLogger("asset_resolver")

DEFAULT_BASE_ORIGIN = "http://localhost:8000"
DEFAULT_UPLOAD_ROOT = "/uploads"
DEFAULT_STATIC_PREFIX = "/assets/"
DEFAULT_PROBE_TIMEOUT = 10.0

# Returned when both a reference and its fallback are empty.
LAST_RESORT_IMAGE = "/assets/placeholder.png"

BASE_ORIGIN_ENV = "API_BASE_URL"
# Read when API_BASE_URL is unset.
PUBLIC_BASE_ORIGIN_ENV = "NEXT_PUBLIC_API_BASE_URL"
FRONTEND_ORIGIN_ENV = "ASSET_FRONTEND_ORIGIN"
PROBE_TIMEOUT_ENV = "ASSET_PROBE_TIMEOUT"


@dataclass(frozen=True)
class DefaultImages:
    """Named images used when nothing better is available."""

    banner: str = "/uploads/1758873063_a-book-1760998_1280.jpg"
    hero: str = "/uploads/1758801057_a-book-759873_640.jpg"
    thumbnail: str = "/uploads/1758801057_book-419589_640.jpg"
    library_cover: str = "/uploads/1758779936_a-book-1760998_1280.jpg"

    def for_role(self, role: str) -> str:
        """Return the default image for a role such as ``"hero"``."""
        key = role.strip().lower().replace("-", "_")
        if key not in {item.name for item in fields(self)}:
            raise KeyError(f"Unknown default image role: {role!r}")
        return getattr(self, key)


DEFAULT_IMAGES = DefaultImages()


def _normalize_origin(value: Optional[str]) -> str:
    return (value or "").strip().rstrip("/")


def _normalize_upload_root(value: str) -> str:
    stripped = value.strip().strip("/")
    return f"/{stripped}" if stripped else ""


def _normalize_static_prefix(value: str) -> str:
    stripped = value.strip().strip("/")
    return f"/{stripped}/" if stripped else "/"


@dataclass(frozen=True)
class ResolverConfig:
    """Immutable settings shared by the resolver, probers and selector."""

    base_origin: str = DEFAULT_BASE_ORIGIN
    upload_root: str = DEFAULT_UPLOAD_ROOT
    static_prefix: str = DEFAULT_STATIC_PREFIX
    defaults: DefaultImages = field(default_factory=DefaultImages)
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    frontend_origin: Optional[str] = None

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "base_origin", _normalize_origin(self.base_origin))
        object.__setattr__(
            self, "upload_root", _normalize_upload_root(self.upload_root)
        )
        object.__setattr__(
            self, "static_prefix", _normalize_static_prefix(self.static_prefix)
        )
        if self.frontend_origin is not None:
            object.__setattr__(
                self,
                "frontend_origin",
                _normalize_origin(self.frontend_origin) or None,
            )

    @property
    def upload_prefix(self) -> str:
        """Prefix marking references to server-managed uploads."""
        return f"{self.upload_root}/"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ResolverConfig":
        """Build a configuration from environment variables.

        ``API_BASE_URL`` (or ``NEXT_PUBLIC_API_BASE_URL``) sets the backend
        origin, ``ASSET_FRONTEND_ORIGIN`` the origin serving static assets and
        ``ASSET_PROBE_TIMEOUT`` the probe timeout in seconds. Missing or blank values fall back to defaults.
        """
        env = os.environ if environ is None else environ
        base_origin = (
            (env.get(BASE_ORIGIN_ENV) or "").strip()
            or (env.get(PUBLIC_BASE_ORIGIN_ENV) or "").strip()
            or DEFAULT_BASE_ORIGIN
        )
        frontend_origin = (env.get(FRONTEND_ORIGIN_ENV) or "").strip() or None

        probe_timeout = DEFAULT_PROBE_TIMEOUT
        raw_timeout = (env.get(PROBE_TIMEOUT_ENV) or "").strip()
        if raw_timeout:
            try:
                probe_timeout = float(raw_timeout)
            except ValueError:
                logger.warning(
                    "%s is set to %r which is not a number; using %.1fs",
                    PROBE_TIMEOUT_ENV,
                    raw_timeout,
                    DEFAULT_PROBE_TIMEOUT,
                )
            else:
                if probe_timeout <= 0:
                    logger.warning(
                        "%s must be positive (got %s); using %.1fs",
                        PROBE_TIMEOUT_ENV,
                        raw_timeout,
                        DEFAULT_PROBE_TIMEOUT,
                    )
                    probe_timeout = DEFAULT_PROBE_TIMEOUT

        return cls(
            base_origin=base_origin,
            frontend_origin=frontend_origin,
            probe_timeout=probe_timeout,
        )
