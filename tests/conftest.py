import asyncio
from typing import Iterable, List

import pytest

from asset_resolver.config import ResolverConfig
from asset_resolver.models import ProbeOutcome, ProbeResult
from asset_resolver.probe import AccessibilityProber
from asset_resolver.resolver import UrlResolver


class FakeProber(AccessibilityProber):
    """Reports URLs in ``reachable`` as loadable and records every probe."""

    def __init__(self, reachable: Iterable[str] = ()) -> None:
        self.reachable = set(reachable)
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def check(self, url: str) -> ProbeResult:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(0)
        try:
            if url in self.reachable:
                return ProbeResult(url=url, outcome=ProbeOutcome.OK, status_code=200)
            return ProbeResult(url=url, outcome=ProbeOutcome.NOT_FOUND, status_code=404)
        finally:
            self.in_flight -= 1


@pytest.fixture
def config():
    return ResolverConfig(base_origin="http://localhost:8000")


@pytest.fixture
def resolver(config):
    return UrlResolver(config)


@pytest.fixture
def make_prober():
    return FakeProber
