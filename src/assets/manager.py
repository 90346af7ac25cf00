"""Asset management: preconnect hints, critical and per-page preloads.

One ``AssetManager`` exists per running site. It is created by the
composition root and handed to the components that need it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from html import escape
from typing import Iterable, Mapping

from .core.capabilities import FormatProbe, supports_format
from .core.constants import (
    CRITICAL_ASSETS,
    OPTIMIZABLE_EXTENSIONS,
    OPTIMIZED_FORMATS,
    PAGE_ASSETS,
    PRECONNECT_ORIGINS,
)
from .preloader import ImagePreloader

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(
    r"\.(" + "|".join(OPTIMIZABLE_EXTENSIONS) + r")$", re.IGNORECASE
)


@dataclass
class DocumentHead:
    """The ``<head>`` links emitted by the runtime, in insertion order."""

    links: list[dict[str, str]] = field(default_factory=list)

    def append_link(self, rel: str, href: str) -> None:
        self.links.append({"rel": rel, "href": href})

    def render(self) -> str:
        return "\n".join(
            f'<link rel="{escape(link["rel"])}" href="{escape(link["href"])}">'
            for link in self.links
        )


class AssetManager:
    """Track which assets are displayable and drive preloading.

    Args:
        preloader: Shared image preloader.
        head: Document head receiving preconnect hints.
        probe: Format capability check, ``supports_format`` by default.
        page_assets: Page name -> asset URLs table.
        critical_assets: URLs preloaded by ``initialize``.
        preconnect_origins: Origins hinted by ``initialize``.
    """

    def __init__(
        self,
        preloader: ImagePreloader,
        head: DocumentHead | None = None,
        probe: FormatProbe = supports_format,
        page_assets: Mapping[str, Iterable[str]] = PAGE_ASSETS,
        critical_assets: Iterable[str] = CRITICAL_ASSETS,
        preconnect_origins: Iterable[str] = PRECONNECT_ORIGINS,
    ) -> None:
        self.preloader = preloader
        self.head = head if head is not None else DocumentHead()
        self._probe = probe
        self._page_assets = {k: tuple(v) for k, v in page_assets.items()}
        self._critical_assets = tuple(critical_assets)
        self._preconnect_origins = tuple(preconnect_origins)
        self._loaded_assets: set[str] = set()
        self._failed_assets: set[str] = set()

    async def initialize(self) -> None:
        """Add preconnect hints and preload critical assets.

        Call once at startup. Preload failures are logged, never raised.
        """
        self._preconnect_domains()
        await self._preload(self._critical_assets, "critical assets")

    def _preconnect_domains(self) -> None:
        for origin in self._preconnect_origins:
            self.head.append_link("preconnect", origin)

    async def preload_page_assets(self, page: str) -> None:
        """Preload the asset batch registered for ``page``.

        Unknown pages and empty batches are no-ops. Failures are logged and
        swallowed so navigation is never affected.
        """
        assets = self._page_assets.get(page, ())
        if not assets:
            return
        await self._preload(assets, f"page '{page}'")

    async def _preload(self, assets: tuple[str, ...], label: str) -> None:
        try:
            await self.preloader.preload_batch(assets)
        except Exception as e:
            logger.warning("Failed to preload %s: %s", label, e)
            return
        for asset in assets:
            self._mark_loaded(asset)

    def _mark_loaded(self, url: str) -> None:
        if url not in self._failed_assets:
            self._loaded_assets.add(url)

    def is_asset_loaded(self, url: str) -> bool:
        return url in self._loaded_assets

    def is_asset_failed(self, url: str) -> bool:
        return url in self._failed_assets

    def mark_asset_failed(self, url: str) -> None:
        """Record ``url`` as unloadable until ``clear_cache``."""
        self._loaded_assets.discard(url)
        self._failed_assets.add(url)

    def get_optimized_image_url(
        self,
        url: str,
        format: str | None = None,
        width: int | None = None,
        height: int | None = None,
        quality: int | None = None,
    ) -> str:
        """Swap the extension of ``url`` for a supported modern format.

        Only ``format`` has an effect; ``width``, ``height`` and ``quality``
        are accepted for callers targeting an image CDN. The rewritten URL
        assumes a sibling file exists and is not checked.

        Returns:
            ``/x.webp`` for ``/x.png`` when WebP decoding is supported,
            otherwise ``url`` unchanged.
        """
        if format not in OPTIMIZED_FORMATS or not self._probe(format):
            return url
        return _EXTENSION_RE.sub(f".{format}", url)

    def get_stats(self) -> dict:
        return {
            "loaded": len(self._loaded_assets),
            "failed": len(self._failed_assets),
            "loaded_assets": sorted(self._loaded_assets),
            "failed_assets": sorted(self._failed_assets),
            "preloader_stats": self.preloader.get_stats(),
        }

    def clear_cache(self) -> None:
        self._loaded_assets.clear()
        self._failed_assets.clear()
        self.preloader.clear_cache()
