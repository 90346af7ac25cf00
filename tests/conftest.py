import asyncio

import pytest

from src.assets.io.images import ImageFetchError


class FakeFetcher:
    """Image fetcher double that records calls and fails selected URLs."""

    def __init__(self, failing=()) -> None:
        self.failing = set(failing)
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def __call__(self, url: str) -> None:
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if url in self.failing:
            raise ImageFetchError(f"cannot load {url}")

    def hold(self) -> asyncio.Event:
        self.gate = asyncio.Event()
        return self.gate

    def count(self, url: str) -> int:
        return self.calls.count(url)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "portfolio.duckdb")
