import asyncio

import pytest

from src.assets.manager import AssetManager
from src.assets.preloader import ImagePreloader
from src.ui.lazy_image import LazyImage, LoadState
from src.ui.visibility import Viewport

SRC = "/images/photo.jpg"
FALLBACK = "/images/placeholder.svg"


class Calls:
    def __init__(self) -> None:
        self.loaded = 0
        self.errored = 0

    def on_load(self) -> None:
        self.loaded += 1

    def on_error(self) -> None:
        self.errored += 1


def below_fold_image(fetcher, viewport, **kwargs) -> LazyImage:
    viewport.place("photo", top=2000, height=200)
    return LazyImage(SRC, "Photo", fetcher, viewport, element_id="photo", **kwargs)


async def test_priority_image_loads_without_visibility(fetcher):
    image = LazyImage(SRC, "Photo", fetcher, priority=True)
    image.mount()
    assert image.state is LoadState.IN_VIEW

    assert await image.wait() is LoadState.LOADED
    assert fetcher.calls == [SRC]
    assert image.snapshot().current_src == SRC
    assert image.is_loaded


def test_non_priority_image_requires_observer(fetcher):
    with pytest.raises(ValueError):
        LazyImage(SRC, "Photo", fetcher)


async def test_no_fetch_before_visible(fetcher):
    viewport = Viewport(height=800)
    image = below_fold_image(fetcher, viewport)
    image.mount()
    await asyncio.sleep(0)

    assert fetcher.calls == []
    assert image.state is LoadState.IDLE
    assert not image.is_in_view


async def test_single_fetch_after_entering_view(fetcher):
    viewport = Viewport(height=800)
    image = below_fold_image(fetcher, viewport)
    image.mount()

    viewport.scroll_to(1300)
    assert await image.wait() is LoadState.LOADED

    viewport.scroll_to(0)
    viewport.scroll_to(1300)
    await asyncio.sleep(0)
    assert fetcher.calls == [SRC]
    assert viewport._observations == []


async def test_margin_and_threshold_gate_visibility(fetcher):
    viewport = Viewport(height=800)
    viewport.place("near", top=820, height=200)
    viewport.place("far", top=845, height=200)
    near = LazyImage("/near.png", "", fetcher, viewport, element_id="near")
    far = LazyImage("/far.png", "", fetcher, viewport, element_id="far")
    near.mount()
    far.mount()

    await near.wait()
    assert near.state is LoadState.LOADED
    assert far.state is LoadState.IDLE
    assert [o.element_id for o in viewport._observations] == ["far"]


async def test_fallback_loaded_when_src_fails(fetcher):
    fetcher.failing.add(SRC)
    calls = Calls()
    image = LazyImage(
        SRC, "Photo", fetcher, priority=True, fallback_src=FALLBACK,
        on_load=calls.on_load, on_error=calls.on_error,
    )
    image.mount()

    assert await image.wait() is LoadState.FALLBACK_LOADED
    assert image.current_src == FALLBACK
    assert image.is_loaded and not image.has_error
    assert fetcher.calls == [SRC, FALLBACK]
    assert (calls.loaded, calls.errored) == (0, 0)


async def test_error_when_both_fail(fetcher):
    fetcher.failing.update({SRC, FALLBACK})
    calls = Calls()
    image = LazyImage(
        SRC, "Photo", fetcher, priority=True, fallback_src=FALLBACK,
        on_load=calls.on_load, on_error=calls.on_error,
    )
    image.mount()

    assert await image.wait() is LoadState.ERROR
    assert calls.errored == 1
    html = image.render()
    assert "Image not available" in html
    assert "<img" not in html
    assert "width:320px;height:240px" in html


@pytest.mark.parametrize("fallback", [None, "", SRC])
async def test_error_without_distinct_fallback(fetcher, fallback):
    fetcher.failing.add(SRC)
    image = LazyImage(SRC, "Photo", fetcher, priority=True, fallback_src=fallback)
    image.mount()

    assert await image.wait() is LoadState.ERROR
    assert fetcher.calls == [SRC]


async def test_on_load_fires_once(fetcher):
    calls = Calls()
    image = LazyImage(SRC, "Photo", fetcher, priority=True, on_load=calls.on_load)
    image.mount()
    image.mount()
    await image.wait()

    assert calls.loaded == 1
    assert fetcher.calls == [SRC]


async def test_raising_callback_does_not_escape(fetcher):
    def boom():
        raise RuntimeError("callback failure")

    image = LazyImage(SRC, "Photo", fetcher, priority=True, on_load=boom)
    image.mount()
    assert await image.wait() is LoadState.LOADED


async def test_render_reflects_loading_state(fetcher):
    viewport = Viewport(height=800)
    image = below_fold_image(fetcher, viewport, class_name="rounded")
    image.mount()

    idle = image.render()
    assert "opacity-70" in idle
    assert 'loading="lazy"' in idle
    assert "data:image/svg+xml;base64," in idle

    viewport.scroll_to(1500)
    await image.wait()
    loaded = image.render()
    assert "opacity-100" in loaded
    assert f'src="{SRC}"' in loaded
    assert "rounded" in loaded


async def test_priority_renders_eager(fetcher):
    image = LazyImage(SRC, "Photo", fetcher, priority=True)
    assert 'loading="eager"' in image.render()


async def test_unmount_before_visible_prevents_loading(fetcher):
    viewport = Viewport(height=800)
    image = below_fold_image(fetcher, viewport)
    image.mount()
    image.unmount()

    viewport.scroll_to(1500)
    await asyncio.sleep(0)
    assert fetcher.calls == []
    assert image.state is LoadState.IDLE


async def test_failed_src_is_reported_and_skipped_next_time(fetcher):
    fetcher.failing.add(SRC)
    assets = AssetManager(ImagePreloader(fetcher), probe=lambda f: False)

    first = LazyImage(SRC, "Photo", fetcher, priority=True, assets=assets)
    first.mount()
    await first.wait()
    assert assets.is_asset_failed(SRC)

    second = LazyImage(SRC, "Photo", fetcher, priority=True, assets=assets)
    second.mount()
    assert await second.wait() is LoadState.FALLBACK_LOADED
    assert fetcher.count(SRC) == 1


async def test_preloader_cache_is_shared(fetcher):
    preloader = ImagePreloader(fetcher)
    await preloader.preload(SRC)

    image = LazyImage(SRC, "Photo", preloader.preload, priority=True)
    image.mount()
    assert await image.wait() is LoadState.LOADED
    assert fetcher.count(SRC) == 1
