"""Lazily loaded images with a fallback chain.

A ``LazyImage`` shows a placeholder until it scrolls into view (or at once
when ``priority`` is set), then loads ``src``. If that fails it tries
``fallback_src``; if that fails too it renders an "Image not available"
block instead of an ``<img>``.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from html import escape
from typing import Awaitable, Callable, Optional

from src.assets.core.constants import DEFAULT_FALLBACK_SRC
from src.assets.core.placeholders import get_placeholder
from src.assets.manager import AssetManager

from .visibility import ObserverOptions, Subscription, ViewportObserver

logger = logging.getLogger(__name__)

Loader = Callable[[str], Awaitable[None]]

DEFAULT_PLACEHOLDER = get_placeholder("default")


class LoadState(str, Enum):
    IDLE = "idle"
    IN_VIEW = "in_view"
    LOADING = "loading"
    LOADED = "loaded"
    FALLBACK_LOADING = "fallback_loading"
    FALLBACK_LOADED = "fallback_loaded"
    ERROR = "error"


TERMINAL_STATES = frozenset(
    {LoadState.LOADED, LoadState.FALLBACK_LOADED, LoadState.ERROR}
)


@dataclass(frozen=True)
class LazyImageState:
    current_src: str
    is_loaded: bool
    has_error: bool
    is_in_view: bool


def _fire(callback: Optional[Callable[[], None]], name: str) -> None:
    if callback is None:
        return
    try:
        callback()
    except Exception:
        logger.exception("LazyImage %s callback raised", name)


class LazyImage:
    """One image element and its load state machine.

    Args:
        src: Image URL to display.
        alt: Alternative text.
        load: Coroutine function fetching a URL, raising on failure. The
            runtime passes ``ImagePreloader.preload`` so cached and in-flight
            images are shared.
        observer: Viewport used for visibility gating; required unless
            ``priority`` is set.
        fallback_src: Second URL tried when ``src`` fails. Ignored when equal
            to ``src`` or empty.
        placeholder: Source shown while idle/loading.
        priority: Load immediately on mount, skipping visibility gating.
        assets: Optional asset manager consulted for known failures and
            informed when ``src`` cannot be loaded.
        on_load: Called once when ``src`` loads.
        on_error: Called once when the image ends in the error state.
        width, height: Size of the error block, in pixels.
    """

    def __init__(
        self,
        src: str,
        alt: str,
        load: Loader,
        observer: Optional[ViewportObserver] = None,
        *,
        element_id: Optional[str] = None,
        class_name: str = "",
        fallback_src: Optional[str] = DEFAULT_FALLBACK_SRC,
        placeholder: str = DEFAULT_PLACEHOLDER,
        priority: bool = False,
        assets: Optional[AssetManager] = None,
        on_load: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[], None]] = None,
        width: int = 320,
        height: int = 240,
        observer_options: ObserverOptions = ObserverOptions(),
    ) -> None:
        if observer is None and not priority:
            raise ValueError("a viewport observer is required for non-priority images")
        self.src = src
        self.alt = alt
        self.fallback_src = fallback_src
        self.placeholder = placeholder
        self.priority = priority
        self.class_name = class_name
        self.width = width
        self.height = height
        self.element_id = element_id or f"img-{uuid.uuid4().hex[:8]}"
        self._load = load
        self._observer = observer
        self._observer_options = observer_options
        self._assets = assets
        self._on_load = on_load
        self._on_error = on_error

        self.state = LoadState.IDLE
        self.current_src = placeholder
        self._subscription: Optional[Subscription] = None
        self._task: Optional[asyncio.Task[None]] = None
        self.fetch_attempts: list[str] = []

    @property
    def is_loaded(self) -> bool:
        return self.state in (LoadState.LOADED, LoadState.FALLBACK_LOADED)

    @property
    def has_error(self) -> bool:
        return self.state is LoadState.ERROR

    @property
    def is_in_view(self) -> bool:
        return self.state is not LoadState.IDLE

    def snapshot(self) -> LazyImageState:
        return LazyImageState(
            current_src=self.current_src,
            is_loaded=self.is_loaded,
            has_error=self.has_error,
            is_in_view=self.is_in_view,
        )

    def mount(self) -> None:
        """Start loading now (priority) or once the element becomes visible."""
        if self.priority:
            self._enter_view()
            return
        assert self._observer is not None
        self._subscription = self._observer.observe(
            self.element_id, self._on_visible, self._observer_options
        )
        # already visible: the callback fired before the subscription was stored
        if self.state is not LoadState.IDLE:
            self._disconnect()

    def unmount(self) -> None:
        self._disconnect()

    def _disconnect(self) -> None:
        if self._subscription is not None:
            self._subscription.disconnect()
            self._subscription = None

    def _on_visible(self) -> None:
        self._disconnect()
        self._enter_view()

    def _enter_view(self) -> None:
        if self.state is not LoadState.IDLE:
            return
        self.state = LoadState.IN_VIEW
        self._task = asyncio.ensure_future(self._run())

    async def wait(self) -> LoadState:
        """Wait for the current load attempt to reach a terminal state."""
        if self._task is not None:
            await self._task
        return self.state

    async def _attempt(self, url: str) -> bool:
        self.fetch_attempts.append(url)
        try:
            await self._load(url)
        except Exception as e:
            logger.debug("image load failed for %s: %s", url, e)
            return False
        return True

    async def _run(self) -> None:
        self.state = LoadState.LOADING
        known_bad = self._assets is not None and self._assets.is_asset_failed(self.src)
        if not known_bad and await self._attempt(self.src):
            self.current_src = self.src
            self.state = LoadState.LOADED
            _fire(self._on_load, "on_load")
            return

        if self._assets is not None:
            self._assets.mark_asset_failed(self.src)

        fallback = self.fallback_src
        if fallback and fallback != self.src:
            self.state = LoadState.FALLBACK_LOADING
            if await self._attempt(fallback):
                self.current_src = fallback
                self.state = LoadState.FALLBACK_LOADED
                return

        self.state = LoadState.ERROR
        _fire(self._on_error, "on_error")

    def render(self) -> str:
        if self.has_error:
            return (
                f'<div id="{escape(self.element_id)}" '
                f'class="flex items-center justify-center bg-gray-800 text-gray-400 {escape(self.class_name)}" '
                f'style="width:{self.width}px;height:{self.height}px">'
                '<div class="text-center">'
                '<div class="text-2xl mb-2">\U0001f4f7</div>'
                '<div class="text-sm">Image not available</div>'
                "</div></div>"
            )
        opacity = "opacity-100" if self.is_loaded else "opacity-70"
        loading = "eager" if self.priority else "lazy"
        return (
            f'<img id="{escape(self.element_id)}" src="{escape(self.current_src)}" '
            f'alt="{escape(self.alt)}" '
            f'class="transition-opacity duration-300 {opacity} {escape(self.class_name)}" '
            f'loading="{loading}">'
        )
