"""Composition root for the client runtime.

``SiteRuntime`` builds exactly one preloader, asset manager, toast queue and
error handler per running site and hands them to the components created
through it. Tests build a fresh runtime instead of resetting globals.
"""

from __future__ import annotations

import logging
from typing import Optional

from src.assets.core.capabilities import FormatProbe, supports_format
from src.assets.io.images import HttpImageFetcher, ImageFetcher
from src.assets.manager import AssetManager, DocumentHead
from src.assets.preloader import ImagePreloader
from src.content import settings
from src.content.client import ContentClient
from src.content.contact import (
    ContactFormData,
    EmailResponse,
    EmailService,
    submit_contact_form,
)
from src.content.errors import GlobalErrorHandler

from .lazy_image import LazyImage
from .optimized_image import ImageOptimizationLoader, OptimizedImage, optimized_image
from .page_assets import PageAssetHook
from .toasts import ToastQueue
from .visibility import Viewport

logger = logging.getLogger(__name__)


class SiteRuntime:
    """Shared services for one running site.

    Args:
        fetch: Image fetcher; an ``HttpImageFetcher`` on ``asset_base_url``
            when omitted.
        viewport: Page viewport for lazy images.
        probe: Image format capability check.
        asset_base_url: Origin of ``/images/...`` paths.
        api_base_url: Origin of the content API.
        email: Contact form delivery service.
    """

    def __init__(
        self,
        fetch: Optional[ImageFetcher] = None,
        viewport: Optional[Viewport] = None,
        probe: FormatProbe = supports_format,
        asset_base_url: str = settings.ASSET_BASE_URL,
        api_base_url: str = settings.API_BASE_URL,
        email: Optional[EmailService] = None,
    ) -> None:
        self._http_fetcher = None
        if fetch is None:
            self._http_fetcher = HttpImageFetcher(asset_base_url)
            fetch = self._http_fetcher
        self.errors = GlobalErrorHandler()
        self.preloader = ImagePreloader(fetch)
        self.head = DocumentHead()
        self.assets = AssetManager(self.preloader, self.head, probe)
        self.toasts = ToastQueue()
        self.viewport = viewport or Viewport()
        self.page_assets = PageAssetHook(self.assets)
        self.content = ContentClient(self.errors, self.toasts, api_base_url)
        self.email = email or EmailService()

    async def start(self, path: str = "/") -> None:
        """Install error reporting, warm critical assets and enter ``path``."""
        self.errors.initialize()
        settings.validate_environment()
        await self.assets.initialize()
        logger.info("site runtime started: %s", self.assets.get_stats())
        self.navigate(path)

    def navigate(self, path: str) -> None:
        self.page_assets.on_route_change(path)

    def lazy_image(self, src: str, alt: str, **kwargs) -> LazyImage:
        image = LazyImage(
            src,
            alt,
            self.preloader.preload,
            self.viewport,
            assets=self.assets,
            **kwargs,
        )
        image.mount()
        return image

    def optimized_image(self, src: str, alt: str, **kwargs) -> OptimizedImage:
        image = optimized_image(
            src, alt, self.preloader.preload, self.viewport, assets=self.assets, **kwargs
        )
        image.mount()
        return image

    def image_loader(self, src: str, **kwargs) -> ImageOptimizationLoader:
        return ImageOptimizationLoader(src, self.assets, self.preloader.preload, **kwargs)

    async def submit_contact(self, form: ContactFormData) -> Optional[EmailResponse]:
        return await submit_contact_form(form, self.email, self.toasts)

    async def close(self) -> None:
        await self.page_assets.drain()
        self.errors.cleanup()
        self.content.close()
        self.email.close()
        if self._http_fetcher is not None:
            self._http_fetcher.close()
