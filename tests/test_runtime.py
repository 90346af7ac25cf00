from src.content.contact import ContactFormData
from src.ui.lazy_image import LoadState
from src.ui.runtime import SiteRuntime
from src.ui.visibility import Viewport


def make_runtime(fetcher) -> SiteRuntime:
    return SiteRuntime(fetch=fetcher, viewport=Viewport(height=600), probe=lambda f: True)


async def test_start_warms_critical_assets_and_route(fetcher):
    runtime = make_runtime(fetcher)
    await runtime.start("/about")
    await runtime.page_assets.drain()

    assert runtime.head.links == [
        {"rel": "preconnect", "href": "https://www.transparenttextures.com"}
    ]
    assert runtime.assets.is_asset_loaded("/images/download.png")
    assert fetcher.count("/images/download.png") == 1
    assert runtime.errors.initialized
    await runtime.close()
    assert not runtime.errors.initialized


async def test_components_share_the_preload_cache(fetcher):
    runtime = make_runtime(fetcher)
    await runtime.start("/")

    runtime.viewport.place("hero", top=0, height=200)
    image = runtime.lazy_image("/images/download.png", "Portrait", element_id="hero")

    assert await image.wait() is LoadState.LOADED
    assert fetcher.count("/images/download.png") == 1
    await runtime.close()


async def test_offscreen_image_waits_for_scroll(fetcher):
    runtime = make_runtime(fetcher)
    runtime.viewport.place("card", top=2000, height=300)
    image = runtime.lazy_image("/images/achievement1.jpg", "Award", element_id="card")

    assert image.state is LoadState.IDLE
    runtime.viewport.scroll_to(1600)
    assert await image.wait() is LoadState.LOADED
    await runtime.close()


async def test_image_loader_prefers_optimized_format(fetcher):
    runtime = make_runtime(fetcher)
    loader = runtime.image_loader("/images/achievement2.jpg", priority=True)
    await loader.mount()

    assert loader.state.src == "/images/achievement2.webp"
    await runtime.close()


async def test_submit_contact_invalid_form_toasts(fetcher):
    runtime = make_runtime(fetcher)
    assert await runtime.submit_contact(ContactFormData("", "bad", "")) is None
    assert runtime.toasts.toasts[0].type.value == "error"
    await runtime.close()
