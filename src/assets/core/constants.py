"""Asset tables and loading defaults shared across the asset modules."""

# External origins that get a <link rel="preconnect"> hint at startup
PRECONNECT_ORIGINS: tuple[str, ...] = ("https://www.transparenttextures.com",)

# Above-the-fold images preloaded unconditionally at startup
CRITICAL_ASSETS: tuple[str, ...] = ("/images/download.png",)

# Per-page preload batches, keyed by page name
PAGE_ASSETS: dict[str, tuple[str, ...]] = {
    "about": ("/images/download.png",),
    "achievements": tuple(f"/images/achievement{i}.jpg" for i in range(1, 8)),
}

# Route path -> page name used by the page asset hook
ROUTE_PAGES: dict[str, str] = {
    "/": "home",
    "/about": "about",
    "/projects": "projects",
    "/skills": "skills",
    "/contact": "contact",
}

DEFAULT_FALLBACK_SRC: str = "/images/placeholder.svg"

# Viewport observation for lazy images
ROOT_MARGIN_PX: int = 50
VISIBILITY_THRESHOLD: float = 0.1

OPTIMIZABLE_EXTENSIONS: tuple[str, ...] = ("jpg", "jpeg", "png")
OPTIMIZED_FORMATS: tuple[str, ...] = ("webp", "avif")
