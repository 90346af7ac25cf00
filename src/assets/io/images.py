"""Image fetching over HTTP with retrying sessions.

A fetch succeeds when the response body decodes as an image, which mirrors
what a browser ``Image`` element reports through ``onload``/``onerror``.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from io import BytesIO
from typing import Awaitable, Callable
from urllib.parse import unquote_to_bytes, urljoin

import requests
from PIL import Image, UnidentifiedImageError
from requests.adapters import HTTPAdapter, Retry

logger = logging.getLogger(__name__)

ImageFetcher = Callable[[str], Awaitable[None]]


class ImageFetchError(Exception):
    """Raised when an image cannot be downloaded or decoded."""


def _session() -> requests.Session:
    s = requests.Session()
    retries = Retry(
        total=3,
        connect=3,
        read=3,
        backoff_factor=0.3,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset(["GET", "HEAD"]),
    )
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.mount("https://", HTTPAdapter(max_retries=retries))
    return s


def _is_svg(content_type: str, url: str, body: bytes) -> bool:
    if "svg" in content_type or url.lower().split("?")[0].endswith(".svg"):
        return body.lstrip()[:1] == b"<"
    return False


def verify_image_bytes(body: bytes, url: str = "", content_type: str = "") -> None:
    """Check that ``body`` is a decodable image.

    SVG documents are accepted on a markup sniff since raster decoders
    cannot open them.

    Raises:
        ImageFetchError: If the bytes are empty or not an image.
    """
    if not body:
        raise ImageFetchError(f"Empty image body: {url}")
    if _is_svg(content_type, url, body):
        return
    try:
        with Image.open(BytesIO(body)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ImageFetchError(f"Undecodable image {url}: {e}") from e


def _decode_data_url(url: str) -> tuple[bytes, str]:
    header, _, payload = url.partition(",")
    content_type = header[len("data:") :].split(";")[0]
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload), content_type
        except ValueError as e:
            raise ImageFetchError(f"Malformed data URL: {e}") from e
    return unquote_to_bytes(payload), content_type


class HttpImageFetcher:
    """Download images relative to ``base_url`` without blocking the event loop.

    Args:
        base_url: Origin that same-origin paths such as ``/images/x.png``
            resolve against.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, base_url: str, timeout: float = 15.0) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self._http = _session()

    def resolve(self, url: str) -> str:
        return urljoin(self.base_url, url)

    def fetch_sync(self, url: str) -> None:
        if url.startswith("data:"):
            body, content_type = _decode_data_url(url)
            verify_image_bytes(body, url[:32], content_type)
            return
        target = self.resolve(url)
        try:
            r = self._http.get(target, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise ImageFetchError(f"Request failed for {target}: {e}") from e
        verify_image_bytes(r.content, target, r.headers.get("Content-Type", ""))
        logger.debug("fetched image %s (%d bytes)", target, len(r.content))

    async def __call__(self, url: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.fetch_sync, url)

    def close(self) -> None:
        self._http.close()
