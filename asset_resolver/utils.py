"""Utility helpers for classifying asset reference strings."""

from __future__ import annotations

from typing import Any, Optional

ABSOLUTE_URL_PREFIXES = ("http://", "https://")


def is_blank(value: Any) -> bool:
    """True for None, non-strings and strings holding only whitespace."""
    return not isinstance(value, str) or not value.strip()


def is_absolute_url(value: str) -> bool:
    return value.startswith(ABSOLUTE_URL_PREFIXES)


def is_bare_filename(value: str) -> bool:
    return "/" not in value


def to_fetchable(url: str, origin: Optional[str]) -> Optional[str]:
    """Return ``url`` as an absolute URL, joining root-relative paths to ``origin``."""
    if is_absolute_url(url):
        return url
    if origin and url.startswith("/") and not url.startswith("//"):
        return f"{origin}{url}"
    return None
