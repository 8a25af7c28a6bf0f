"""Caller-facing entry points used by page and template code."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .config import ResolverConfig
from .probe import AccessibilityProber, HttpProber
from .resolver import UrlResolver
from .selector import FallbackSelector
from .surface import LoadErrorHandler, RenderingSurface, attach_load_error_handler


class AssetUrlService:
    """Bundle the resolver, a prober and the selector behind one object."""

    def __init__(
        self,
        config: ResolverConfig,
        prober: Optional[AccessibilityProber] = None,
    ) -> None:
        self.config = config
        self.resolver = UrlResolver(config)
        self.prober = prober or HttpProber(
            timeout=config.probe_timeout,
            frontend_origin=config.frontend_origin,
        )
        self.selector = FallbackSelector(self.resolver, self.prober)

    def resolve(self, reference: Any, fallback: Optional[str] = None) -> str:
        return self.resolver.resolve(reference, fallback)

    def get_optimized_url(self, reference: Any, options: Any = None) -> str:
        return self.resolver.optimized_url(reference, options)

    def default_for(self, role: str) -> str:
        """Resolved default image for ``role`` (banner, hero, thumbnail, library_cover)."""
        return self.resolver.resolve(self.config.defaults.for_role(role))

    def attach_load_error_handler(
        self, surface: RenderingSurface, fallback: Optional[str] = None
    ) -> LoadErrorHandler:
        """Arm a one-shot handler; the fallback defaults to the resolved thumbnail."""
        return attach_load_error_handler(surface, self.resolver.resolve(None, fallback))

    async def select_best(
        self, candidates: Optional[Iterable[Any]] = None, fallback: Optional[str] = None
    ) -> str:
        return await self.selector.select_best(candidates, fallback)
