"""UI package public API.
Re-exports the lazy image state machine, optimized images, the toast queue,
the page asset hook and the viewport.
"""

from .lazy_image import LazyImage, LazyImageState, LoadState
from .optimized_image import (
    ImageOptimizationLoader,
    ImageSource,
    ImageState,
    OptimizedImage,
    optimized_image,
)
from .page_assets import PageAssetHook
from .toasts import Toast, ToastQueue, ToastType
from .visibility import ObserverOptions, Viewport

__all__ = [
    "LazyImage",
    "LazyImageState",
    "LoadState",
    "ImageOptimizationLoader",
    "ImageSource",
    "ImageState",
    "OptimizedImage",
    "optimized_image",
    "PageAssetHook",
    "Toast",
    "ToastQueue",
    "ToastType",
    "ObserverOptions",
    "Viewport",
]
