from src.assets.manager import AssetManager
from src.assets.preloader import ImagePreloader
from src.ui.lazy_image import LoadState
from src.ui.optimized_image import ImageOptimizationLoader, ImageSource, optimized_image

ORIGINAL = "/images/achievement1.jpg"
WEBP = "/images/achievement1.webp"


def make_assets(fetcher, supported=True) -> AssetManager:
    return AssetManager(ImagePreloader(fetcher), probe=lambda f: supported)


async def test_optimized_version_preferred(fetcher):
    loader = ImageOptimizationLoader(ORIGINAL, make_assets(fetcher), fetcher, priority=True)
    await loader.mount()

    assert loader.state.src == WEBP
    assert loader.state.is_optimized
    assert not loader.state.is_loading
    assert fetcher.calls == [WEBP]


async def test_falls_back_to_original(fetcher):
    fetcher.failing.add(WEBP)
    loader = ImageOptimizationLoader(ORIGINAL, make_assets(fetcher), fetcher, priority=True)
    await loader.mount()

    assert loader.state.src == ORIGINAL
    assert not loader.state.is_optimized
    assert fetcher.calls == [WEBP, ORIGINAL]


async def test_unsupported_format_loads_original_once(fetcher):
    loader = ImageOptimizationLoader(
        ORIGINAL, make_assets(fetcher, supported=False), fetcher, priority=True
    )
    await loader.mount()

    assert loader.state.src == ORIGINAL
    assert fetcher.calls == [ORIGINAL]


async def test_both_fail_uses_fallback_and_marks_failed(fetcher):
    fetcher.failing.update({WEBP, ORIGINAL})
    assets = make_assets(fetcher)
    loader = ImageOptimizationLoader(
        ORIGINAL, assets, fetcher, priority=True, fallback_src="/images/placeholder.svg"
    )
    await loader.mount()

    assert loader.state.src == "/images/placeholder.svg"
    assert not loader.state.has_error
    assert assets.is_asset_failed(ORIGINAL)


async def test_both_fail_without_fallback_errors(fetcher):
    fetcher.failing.update({WEBP, ORIGINAL})
    errors = []
    loader = ImageOptimizationLoader(
        ORIGINAL, make_assets(fetcher), fetcher, priority=True,
        on_error=lambda: errors.append(1),
    )
    await loader.mount()

    assert loader.state.has_error
    assert errors == [1]


async def test_known_assets_skip_fetching(fetcher):
    assets = make_assets(fetcher)
    await assets.preload_page_assets("achievements")
    fetcher.calls.clear()
    loads = []

    loader = ImageOptimizationLoader(ORIGINAL, assets, fetcher, on_load=lambda: loads.append(1))
    await loader.trigger_load()

    assert loader.state.src == ORIGINAL
    assert loader.state.is_optimized
    assert loads == [1]
    assert fetcher.calls == []


async def test_trigger_load_only_for_non_priority_placeholders(fetcher):
    assets = make_assets(fetcher)
    loader = ImageOptimizationLoader(ORIGINAL, assets, fetcher)
    await loader.mount()
    assert fetcher.calls == []

    await loader.trigger_load()
    await loader.trigger_load()
    assert fetcher.calls == [WEBP]

    await loader.retry()
    assert fetcher.calls == [WEBP, WEBP]


async def test_optimized_image_wraps_sources_in_picture(fetcher):
    image = optimized_image(
        ORIGINAL,
        "Award",
        fetcher,
        sources=[ImageSource(WEBP, type="image/webp", media="(min-width: 600px)")],
        sizes="100vw",
        class_name="card",
        priority=True,
    )
    image.mount()
    assert await image.image.wait() is LoadState.LOADED

    html = image.render()
    assert html.startswith('<picture class="card">')
    assert f'<source srcset="{WEBP}" type="image/webp" media="(min-width: 600px)" sizes="100vw">' in html
    assert "w-full h-full" in html
    assert html.endswith("</picture>")


async def test_optimized_image_defaults_fallback_to_placeholder_route(fetcher):
    fetcher.failing.add(ORIGINAL)
    image = optimized_image(ORIGINAL, "Award", fetcher, priority=True)
    image.mount()

    assert await image.image.wait() is LoadState.FALLBACK_LOADED
    assert image.image.current_src == "/images/placeholder.svg"
    assert not image.render().startswith("<picture")
