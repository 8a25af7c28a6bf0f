"""Choose the first reachable image from an ordered list of references."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .probe import AccessibilityProber
from .resolver import UrlResolver
from .utils import is_blank

logger = logging.getLogger("asset_resolver.selector")


class FallbackSelector:
    """Sequential, short-circuiting scan over candidate references.

    Candidates are in preference order. Each one is resolved and probed only
    after the previous probe has finished, and the scan stops at the first
    reachable URL. At most one probe per call is in flight.
    """

    def __init__(self, resolver: UrlResolver, prober: AccessibilityProber) -> None:
        self.resolver = resolver
        self.prober = prober

    async def select_best(
        self,
        candidates: Optional[Iterable[Any]] = None,
        fallback: Optional[str] = None,
    ) -> str:
        for index, candidate in enumerate(candidates or ()):
            if is_blank(candidate):
                continue
            url = self.resolver.resolve(candidate)
            result = await self.prober.check(url)
            if result.reachable:
                logger.debug("Selected candidate %d: %s", index, url)
                return url
            logger.debug(
                "Rejected candidate %d: %s (%s)", index, url, result.outcome.value
            )

        resolved_fallback = self.resolver.resolve(None, fallback)
        logger.debug("No candidate reachable; using %s", resolved_fallback)
        return resolved_fallback
