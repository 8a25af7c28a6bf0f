"""One-shot fallback substitution for images that fail to load."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Protocol

logger = logging.getLogger("asset_resolver.surface")

ErrorListener = Callable[..., object]


class RenderingSurface(Protocol):
    """Anything that displays an image and signals when loading it fails."""

    src: Optional[str]

    def add_error_listener(self, listener: ErrorListener) -> None:
        ...

    def remove_error_listener(self, listener: ErrorListener) -> None:
        ...


class ImageSurface:
    """In-process rendering surface with an explicit failure signal."""

    def __init__(self, src: Optional[str] = None) -> None:
        self.src = src
        self._error_listeners: List[ErrorListener] = []

    def add_error_listener(self, listener: ErrorListener) -> None:
        self._error_listeners.append(listener)

    def remove_error_listener(self, listener: ErrorListener) -> None:
        if listener in self._error_listeners:
            self._error_listeners.remove(listener)

    @property
    def error_listeners(self) -> List[ErrorListener]:
        return list(self._error_listeners)

    def fail(self, event: object = None) -> None:
        """Dispatch the failure signal to every listener registered right now."""
        for listener in list(self._error_listeners):
            listener(event)


class HandlerState(str, Enum):
    ARMED = "armed"
    FIRED = "fired"


class LoadErrorHandler:
    """Swap a surface's source for a fallback on its first load failure.

    The handler starts ``ARMED``. The first failure moves it to ``FIRED``,
    detaches it from the surface and sets the fallback source. Once fired it
    never acts again, so an unreachable fallback leaves the surface as is.
    """

    def __init__(self, surface: RenderingSurface, fallback: str) -> None:
        self.surface = surface
        self.fallback = fallback
        self.state = HandlerState.ARMED

    def attach(self) -> "LoadErrorHandler":
        self.surface.add_error_listener(self)
        return self

    def __call__(self, event: object = None) -> bool:
        if self.state is not HandlerState.ARMED:
            return False
        self.state = HandlerState.FIRED
        self.surface.remove_error_listener(self)
        previous = self.surface.src
        self.surface.src = self.fallback
        logger.info("Image %s failed to load; substituted %s", previous, self.fallback)
        return True


def attach_load_error_handler(
    surface: RenderingSurface, fallback: str
) -> LoadErrorHandler:
    return LoadErrorHandler(surface, fallback).attach()
