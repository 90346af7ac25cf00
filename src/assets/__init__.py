"""Assets package public API.
This module re-exports the preloader, the asset manager, the placeholder
generator and the HTTP image fetcher to provide a simplified interface.
"""

from .core.capabilities import supports_format
from .core.constants import (
    CRITICAL_ASSETS,
    DEFAULT_FALLBACK_SRC,
    PAGE_ASSETS,
    PRECONNECT_ORIGINS,
    ROUTE_PAGES,
)
from .core.placeholders import (
    PLACEHOLDERS,
    PlaceholderOptions,
    PlaceholderVariant,
    get_placeholder,
    placeholder_markup,
)
from .io.images import HttpImageFetcher, ImageFetcher, ImageFetchError
from .manager import AssetManager, DocumentHead
from .preloader import ImagePreloader, ImagePreloadError

__all__ = [
    "CRITICAL_ASSETS",
    "DEFAULT_FALLBACK_SRC",
    "PAGE_ASSETS",
    "PRECONNECT_ORIGINS",
    "ROUTE_PAGES",
    "PLACEHOLDERS",
    "PlaceholderOptions",
    "PlaceholderVariant",
    "get_placeholder",
    "placeholder_markup",
    "supports_format",
    "HttpImageFetcher",
    "ImageFetcher",
    "ImageFetchError",
    "AssetManager",
    "DocumentHead",
    "ImagePreloader",
    "ImagePreloadError",
]
