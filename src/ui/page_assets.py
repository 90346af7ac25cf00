"""Route-driven page asset prefetching."""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Optional

from src.assets.core.constants import ROUTE_PAGES
from src.assets.manager import AssetManager

logger = logging.getLogger(__name__)


class PageAssetHook:
    """Start the page's preload batch whenever the route changes.

    Preloads are fire-and-forget tasks. Leaving a page does not cancel its
    batch; late completions still fill the shared cache.
    """

    def __init__(
        self, assets: AssetManager, route_pages: Mapping[str, str] = ROUTE_PAGES
    ) -> None:
        self.assets = assets
        self._route_pages = dict(route_pages)
        self.current_path: Optional[str] = None
        self._tasks: set[asyncio.Task[None]] = set()

    def on_route_change(self, path: str) -> Optional[asyncio.Task[None]]:
        """Record ``path`` and preload its page's assets in the background.

        Returns:
            The preload task, or None when the path maps to no page or did
            not change.
        """
        if path == self.current_path:
            return None
        self.current_path = path
        page = self._route_pages.get(path)
        if page is None:
            return None
        task = asyncio.ensure_future(self.assets.preload_page_assets(page))
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    def _finished(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("page asset preload failed: %s", task.exception())

    async def drain(self) -> None:
        """Wait for every outstanding preload started by this hook."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def get_asset_stats(self) -> dict:
        return self.assets.get_stats()
