"""Image preloading with request coalescing.

The preloader warms the image cache ahead of display. Concurrent requests
for one URL share a single fetch; successful URLs are remembered for the
lifetime of the instance (or until ``clear_cache``), failed ones are not,
so a later call retries.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Iterable

from .core.constants import CRITICAL_ASSETS
from .io.images import ImageFetcher

logger = logging.getLogger(__name__)


class ImagePreloadError(Exception):
    """Raised to awaiters when an image could not be preloaded."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Failed to preload image: {url}")
        self.url = url


class ImagePreloader:
    """Fetch images once, sharing in-flight requests between callers.

    Args:
        fetch: Coroutine function that downloads ``url`` and raises on failure.
    """

    def __init__(self, fetch: ImageFetcher) -> None:
        self._fetch = fetch
        self._preloaded: set[str] = set()
        self._pending: dict[str, asyncio.Future[None]] = {}

    def preload(self, url: str) -> asyncio.Future[None]:
        """Start (or join) the preload of ``url``.

        Returns:
            A future that resolves once the image is cached. Concurrent calls
            for the same URL receive the same future. Raises
            ``ImagePreloadError`` when awaited if the fetch failed.
        """
        if url in self._preloaded:
            done = asyncio.get_running_loop().create_future()
            done.set_result(None)
            return done

        pending = self._pending.get(url)
        if pending is not None:
            return pending

        task = asyncio.ensure_future(self._load(url))
        # registered before any awaiter, so bookkeeping runs first on settle
        task.add_done_callback(partial(self._settle, url))
        self._pending[url] = task
        return task

    async def _load(self, url: str) -> None:
        try:
            await self._fetch(url)
        except Exception as e:
            raise ImagePreloadError(url) from e

    def _settle(self, url: str, task: asyncio.Future[None]) -> None:
        if self._pending.get(url) is task:
            del self._pending[url]
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            self._preloaded.add(url)
        else:
            logger.debug("preload failed for %s: %s", url, error.__cause__ or error)

    async def preload_batch(self, urls: Iterable[str]) -> list[None]:
        """Preload every URL concurrently.

        Fails fast: the first failure is raised while the remaining fetches
        keep running and still populate the cache.
        """
        return await asyncio.gather(*(self.preload(u) for u in urls))

    async def preload_critical(self) -> list[None]:
        return await self.preload_batch(CRITICAL_ASSETS)

    def is_preloaded(self, url: str) -> bool:
        return url in self._preloaded

    def clear_cache(self) -> None:
        self._preloaded.clear()
        self._pending.clear()

    def get_stats(self) -> dict:
        return {
            "preloaded_count": len(self._preloaded),
            "pending_count": len(self._pending),
            "preloaded_images": sorted(self._preloaded),
        }
