"""Viewport observation for deferred image loading.

``Viewport`` models a vertically scrolling page. Elements register their
box, and observers are told when an element's visible share, measured
against the viewport grown by ``root_margin_px`` on each side, reaches
``threshold``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from src.assets.core.constants import ROOT_MARGIN_PX, VISIBILITY_THRESHOLD

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObserverOptions:
    root_margin_px: int = ROOT_MARGIN_PX
    threshold: float = VISIBILITY_THRESHOLD


@dataclass(frozen=True)
class Box:
    top: float
    height: float


class Subscription(Protocol):
    def disconnect(self) -> None: ...


class ViewportObserver(Protocol):
    def observe(
        self,
        element_id: str,
        callback: Callable[[], None],
        options: ObserverOptions = ...,
    ) -> Subscription: ...


def intersection_ratio(
    box: Box, scroll_top: float, viewport_height: float, margin: float
) -> float:
    root_top = scroll_top - margin
    root_bottom = scroll_top + viewport_height + margin
    overlap = min(box.top + box.height, root_bottom) - max(box.top, root_top)
    if box.height <= 0:
        return 1.0 if root_top <= box.top <= root_bottom else 0.0
    return max(0.0, overlap) / box.height


class _Observation:
    def __init__(
        self,
        viewport: "Viewport",
        element_id: str,
        callback: Callable[[], None],
        options: ObserverOptions,
    ) -> None:
        self._viewport = viewport
        self.element_id = element_id
        self.callback = callback
        self.options = options
        self.connected = True

    def disconnect(self) -> None:
        if self.connected:
            self.connected = False
            self._viewport._observations.remove(self)


class Viewport:
    """Scroll position, viewport size and element boxes of one page.

    Args:
        height: Visible height in pixels.
        scroll_top: Initial scroll offset.
    """

    def __init__(self, height: float = 800.0, scroll_top: float = 0.0) -> None:
        self.height = height
        self.scroll_top = scroll_top
        self._boxes: dict[str, Box] = {}
        self._observations: list[_Observation] = []

    def place(self, element_id: str, top: float, height: float) -> None:
        self._boxes[element_id] = Box(top, height)
        self._check()

    def scroll_to(self, scroll_top: float) -> None:
        self.scroll_top = scroll_top
        self._check()

    def resize(self, height: float) -> None:
        self.height = height
        self._check()

    def observe(
        self,
        element_id: str,
        callback: Callable[[], None],
        options: ObserverOptions = ObserverOptions(),
    ) -> _Observation:
        observation = _Observation(self, element_id, callback, options)
        self._observations.append(observation)
        self._notify(observation)
        return observation

    def is_visible(self, element_id: str, options: ObserverOptions) -> bool:
        box = self._boxes.get(element_id)
        if box is None:
            return False
        ratio = intersection_ratio(
            box, self.scroll_top, self.height, options.root_margin_px
        )
        return ratio > 0 and ratio >= options.threshold

    def _check(self) -> None:
        for observation in list(self._observations):
            if observation.connected:
                self._notify(observation)

    def _notify(self, observation: _Observation) -> None:
        if not self.is_visible(observation.element_id, observation.options):
            return
        try:
            observation.callback()
        except Exception:
            logger.exception("visibility callback failed for %s", observation.element_id)
