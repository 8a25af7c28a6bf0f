"""Map raw asset references from the content store onto fetchable URLs."""

from __future__ import annotations

from typing import Any, Optional

from .config import LAST_RESORT_IMAGE, ResolverConfig
from .models import ImageOptions
from .utils import is_absolute_url, is_bare_filename, is_blank


class UrlResolver:
    """Pure, deterministic reference-to-URL mapping.

    Rules are applied in order and the first match wins:

    1. empty reference: resolve the fallback (the thumbnail default when no
       fallback is given) through the same rules;
    2. ``http://`` or ``https://`` URL: unchanged;
    3. static frontend asset (``/assets/...``): unchanged;
    4. backend upload (``/uploads/...``): prefixed with the base origin;
    5. bare filename: placed under the upload root on the base origin;
    6. any other relative path: unchanged.

    Every output is a fixed point of ``resolve``.
    """

    def __init__(self, config: ResolverConfig) -> None:
        self.config = config

    def resolve(self, reference: Any, fallback: Optional[str] = None) -> str:
        if is_blank(reference):
            if is_blank(fallback):
                fallback = self.config.defaults.thumbnail
            if is_blank(fallback):
                return LAST_RESORT_IMAGE
            return self._apply_rules(fallback)
        return self._apply_rules(reference)

    def _apply_rules(self, reference: str) -> str:
        config = self.config
        if is_absolute_url(reference):
            return reference
        if reference.startswith(config.static_prefix):
            return reference
        if reference.startswith(config.upload_prefix):
            return f"{config.base_origin}{reference}"
        if is_bare_filename(reference):
            return f"{config.base_origin}{config.upload_prefix}{reference}"
        return reference

    def optimized_url(self, reference: Any, options: Any = None) -> str:
        """Resolve ``reference`` for display at a given size.

        ``options`` may be an :class:`ImageOptions`, a mapping with ``width``,
        ``height`` and ``quality`` keys, or anything else, which is ignored.
        Sizing is not applied yet; the result is the plain resolved URL.
        """
        ImageOptions.coerce(options)
        return self.resolve(reference)
