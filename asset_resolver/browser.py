"""Headless-browser rendering surfaces built on Playwright."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from playwright.async_api import Browser, Error as PlaywrightError, Page, async_playwright

from .config import DEFAULT_PROBE_TIMEOUT
from .models import ProbeOutcome, ProbeResult
from .probe import AccessibilityProber
from .utils import to_fetchable

logger = logging.getLogger("asset_resolver.browser")

IMAGE_PROBE_SCRIPT = """
(url) => new Promise((resolve) => {
  const img = new Image();
  img.onload = () => resolve(true);
  img.onerror = () => resolve(false);
  img.src = url;
})
"""

# Two states, "armed" and "fired"; the listener acts only while armed.
ONE_SHOT_ERROR_HANDLER_SCRIPT = """
(img, fallback) => {
  let state = "armed";
  const onError = () => {
    if (state !== "armed") {
      return;
    }
    state = "fired";
    img.removeEventListener("error", onError);
    img.src = fallback;
  };
  img.addEventListener("error", onError);
}
"""


class BrowserProber(AccessibilityProber):
    """Probe URLs by loading them as images inside headless Chromium.

    Use as an async context manager so the browser is started and closed
    around a batch of probes. An already running ``Browser`` may be passed in,
    in which case it is left open on exit.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        frontend_origin: Optional[str] = None,
        browser: Optional[Browser] = None,
    ) -> None:
        self.timeout = timeout
        self.frontend_origin = frontend_origin
        self._browser = browser
        self._playwright: Any = None

    async def __aenter__(self) -> "BrowserProber":
        if self._browser is None:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=True)
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._playwright is None:
            return
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()
            self._playwright = None
            self._browser = None

    async def check(self, url: str) -> ProbeResult:
        if self._browser is None:
            raise RuntimeError("BrowserProber must be entered before probing")
        target = to_fetchable(url, self.frontend_origin) if url else None
        if target is None:
            logger.debug("Cannot probe %r: no origin to load it from", url)
            return ProbeResult(url=url, outcome=ProbeOutcome.INVALID_URL)

        page: Optional[Page] = None
        try:
            page = await self._browser.new_page()
            loaded = await asyncio.wait_for(
                page.evaluate(IMAGE_PROBE_SCRIPT, target), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.info("Timed out loading %s after %.1fs", target, self.timeout)
            return ProbeResult(url=url, outcome=ProbeOutcome.TIMEOUT)
        except PlaywrightError as exc:
            logger.info("Browser failed while loading %s: %s", target, exc)
            return ProbeResult(
                url=url, outcome=ProbeOutcome.LOAD_FAILED, detail=str(exc)
            )
        finally:
            if page is not None:
                await _close_page(page)

        if loaded:
            return ProbeResult(url=url, outcome=ProbeOutcome.OK)
        logger.debug("Image at %s did not load", target)
        return ProbeResult(url=url, outcome=ProbeOutcome.LOAD_FAILED)


async def _close_page(page: Page) -> None:
    try:
        await page.close()
    except PlaywrightError as exc:
        logger.debug("Ignoring error while closing probe page: %s", exc)


async def attach_page_error_handler(page: Page, selector: str, fallback: str) -> None:
    """Install a one-shot load-error handler on the ``<img>`` matching ``selector``."""
    await page.eval_on_selector(selector, ONE_SHOT_ERROR_HANDLER_SCRIPT, fallback)
    logger.debug("Armed load-error handler on %s (fallback %s)", selector, fallback)
