"""Reachability probes for resolved asset URLs."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests

from .config import DEFAULT_PROBE_TIMEOUT
from .models import ProbeOutcome, ProbeResult
from .utils import to_fetchable

logger = logging.getLogger("asset_resolver.probe")

NOT_FOUND_STATUSES = {404, 410}
HEAD_UNSUPPORTED_STATUSES = {405, 501}


class AccessibilityProber(ABC):
    """Capability interface: can this URL be loaded as an image?

    Implementations must be safe to call concurrently for different URLs and
    must report failures through :class:`ProbeResult` rather than raising.
    """

    @abstractmethod
    async def check(self, url: str) -> ProbeResult:
        """Probe ``url`` once and describe the outcome."""

    async def probe(self, url: str) -> bool:
        result = await self.check(url)
        return result.reachable


class HttpProber(AccessibilityProber):
    """Probe URLs with a HEAD request, falling back to GET when HEAD is refused.

    Root-relative URLs (static frontend assets) are joined to
    ``frontend_origin``; without one they cannot be fetched and are reported
    as ``INVALID_URL``. Each probe, redirects included, is abandoned after
    ``timeout`` seconds.

    Without an injected ``session`` every probe opens and closes its own
    ``requests.Session``. An injected session is owned by the caller.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        frontend_origin: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.frontend_origin = frontend_origin
        self.session = session

    async def check(self, url: str) -> ProbeResult:
        target = to_fetchable(url, self.frontend_origin) if url else None
        if target is None:
            logger.debug("Cannot probe %r: no origin to fetch it from", url)
            return ProbeResult(url=url, outcome=ProbeOutcome.INVALID_URL)
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._check_blocking, url, target),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.info("Timed out probing %s after %.1fs", target, self.timeout)
            return ProbeResult(url=url, outcome=ProbeOutcome.TIMEOUT)

    def _check_blocking(self, url: str, target: str) -> ProbeResult:
        if self.session is not None:
            return self._request(self.session, url, target)
        session = requests.Session()
        try:
            return self._request(session, url, target)
        finally:
            session.close()

    def _request(self, session: requests.Session, url: str, target: str) -> ProbeResult:
        try:
            resp = session.head(target, timeout=self.timeout, allow_redirects=True)
            if resp.status_code in HEAD_UNSUPPORTED_STATUSES:
                logger.debug("HEAD not supported by %s; retrying with GET", target)
                resp.close()
                resp = session.get(
                    target, timeout=self.timeout, allow_redirects=True, stream=True
                )
            resp.close()
        except requests.Timeout as exc:
            logger.info("Timed out probing %s after %.1fs", target, self.timeout)
            return ProbeResult(url=url, outcome=ProbeOutcome.TIMEOUT, detail=str(exc))
        except requests.RequestException as exc:
            logger.info("Failed to reach %s: %s", target, exc)
            return ProbeResult(
                url=url, outcome=ProbeOutcome.NETWORK_ERROR, detail=str(exc)
            )

        status = resp.status_code
        if resp.ok:
            return ProbeResult(url=url, outcome=ProbeOutcome.OK, status_code=status)
        if status in NOT_FOUND_STATUSES:
            outcome = ProbeOutcome.NOT_FOUND
        else:
            outcome = ProbeOutcome.HTTP_ERROR
        logger.debug("Probe of %s returned HTTP %s", target, status)
        return ProbeResult(url=url, outcome=outcome, status_code=status)
