"""Optimized image rendering and the optimized → original → fallback loader."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from html import escape
from typing import Callable, Optional

from src.assets.core.constants import DEFAULT_FALLBACK_SRC
from src.assets.core.placeholders import PLACEHOLDERS
from src.assets.manager import AssetManager

from .lazy_image import LazyImage, Loader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageSource:
    src: str
    type: Optional[str] = None
    media: Optional[str] = None


@dataclass
class OptimizedImage:
    """A ``LazyImage`` wrapped in ``<picture>`` when explicit sources are given.

    Sources are never generated automatically; only the ones passed in are
    emitted, in order.
    """

    image: LazyImage
    sources: list[ImageSource] = field(default_factory=list)
    sizes: Optional[str] = None
    class_name: str = ""

    def mount(self) -> None:
        self.image.mount()

    def unmount(self) -> None:
        self.image.unmount()

    def render(self) -> str:
        if not self.sources:
            return self.image.render()
        parts = [f'<picture class="{escape(self.class_name)}">']
        for source in self.sources:
            attrs = [f'srcset="{escape(source.src)}"']
            if source.type:
                attrs.append(f'type="{escape(source.type)}"')
            if source.media:
                attrs.append(f'media="{escape(source.media)}"')
            if self.sizes:
                attrs.append(f'sizes="{escape(self.sizes)}"')
            parts.append(f"<source {' '.join(attrs)}>")
        parts.append(self.image.render())
        parts.append("</picture>")
        return "".join(parts)


def optimized_image(
    src: str,
    alt: str,
    load: Loader,
    observer=None,
    *,
    sources: Optional[list[ImageSource]] = None,
    sizes: Optional[str] = None,
    class_name: str = "",
    fallback_src: Optional[str] = None,
    priority: bool = False,
    **kwargs,
) -> OptimizedImage:
    """Build an ``OptimizedImage``; the fallback defaults to the placeholder route."""
    sources = sources or []
    image = LazyImage(
        src,
        alt,
        load,
        observer,
        class_name="w-full h-full" if sources else class_name,
        fallback_src=fallback_src or DEFAULT_FALLBACK_SRC,
        priority=priority,
        **kwargs,
    )
    return OptimizedImage(image, sources, sizes, class_name)


@dataclass(frozen=True)
class ImageState:
    src: str
    is_loading: bool = True
    has_error: bool = False
    is_optimized: bool = False


class ImageOptimizationLoader:
    """Load an image as WebP first, then the original, then ``fallback_src``.

    The asset manager is consulted before any fetch: known-good originals are
    shown directly, known-bad ones go straight to the fallback. When both the
    optimized and original URLs fail, the original is marked failed.
    """

    def __init__(
        self,
        original_src: str,
        assets: AssetManager,
        load: Loader,
        *,
        priority: bool = False,
        placeholder: str = PLACEHOLDERS["GENERIC"],
        fallback_src: Optional[str] = None,
        on_load: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[], None]] = None,
    ) -> None:
        self.original_src = original_src
        self.priority = priority
        self.placeholder = placeholder
        self.fallback_src = fallback_src
        self._assets = assets
        self._load = load
        self._on_load = on_load
        self._on_error = on_error
        self.state = ImageState(src=placeholder)

    async def mount(self) -> None:
        if self.priority:
            await self.load()

    async def trigger_load(self) -> None:
        """Load a non-priority image that is still showing its placeholder."""
        if (
            not self.priority
            and self.state.is_loading
            and self.state.src == self.placeholder
        ):
            await self.load()

    async def retry(self) -> None:
        await self.load()

    def _notify(self, callback: Optional[Callable[[], None]]) -> None:
        if callback is None:
            return
        try:
            callback()
        except Exception:
            logger.exception("image callback raised for %s", self.original_src)

    def _fail(self) -> None:
        if self.fallback_src:
            self.state = ImageState(src=self.fallback_src, is_loading=False)
            return
        self.state = replace(self.state, has_error=True, is_loading=False)
        self._notify(self._on_error)

    async def _try(self, url: str) -> bool:
        try:
            await self._load(url)
        except Exception as e:
            logger.debug("image load failed for %s: %s", url, e)
            return False
        return True

    async def load(self) -> None:
        src = self.original_src
        if not src:
            return

        if self._assets.is_asset_loaded(src):
            self.state = ImageState(src=src, is_loading=False, is_optimized=True)
            self._notify(self._on_load)
            return

        if self._assets.is_asset_failed(src):
            self._fail()
            return

        optimized = self._assets.get_optimized_image_url(src, format="webp", quality=85)
        if await self._try(optimized):
            self.state = ImageState(
                src=optimized, is_loading=False, is_optimized=optimized != src
            )
            self._notify(self._on_load)
            return

        if optimized != src and await self._try(src):
            self.state = ImageState(src=src, is_loading=False)
            self._notify(self._on_load)
            return

        self._assets.mark_asset_failed(src)
        self._fail()
