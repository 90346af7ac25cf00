"""Client for the portfolio content API.

Every public call degrades instead of raising: failures are reported to the
global error handler, surfaced as an error toast, and an empty result is
returned so the page renders its empty state.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter, Retry

from src.ui.toasts import ToastQueue

from . import settings
from .errors import GlobalErrorHandler

logger = logging.getLogger(__name__)


def _session() -> requests.Session:
    s = requests.Session()
    retries = Retry(
        total=3,
        connect=3,
        read=3,
        backoff_factor=0.5,
        status_forcelist=(429, 502, 503, 504),
        allowed_methods=frozenset(["GET"]),
    )
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.mount("https://", HTTPAdapter(max_retries=retries))
    return s


def _order_key(item: dict) -> tuple[int, float]:
    # records without a numeric order sort last, keeping their relative order
    order = item.get("order")
    if isinstance(order, (int, float)) and not isinstance(order, bool):
        return (0, order)
    return (1, 0)


class ContentClient:
    """Read achievements, projects and the resume link from the API.

    Args:
        errors: Handler receiving failure reports.
        toasts: Queue receiving user-facing error toasts; optional.
        base_url: API origin, ``settings.API_BASE_URL`` by default.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        errors: GlobalErrorHandler,
        toasts: Optional[ToastQueue] = None,
        base_url: str = settings.API_BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._errors = errors
        self._toasts = toasts
        self._http = _session()

    def _get_json(self, endpoint: str) -> Any:
        r = self._http.get(f"{self.base_url}{endpoint}", timeout=self.timeout)
        if not r.ok:
            raise RuntimeError(f"API call failed: {r.status_code} {r.reason}")
        return r.json()

    async def api_call(self, endpoint: str) -> Any:
        """GET ``endpoint`` and return its JSON body, or None on any failure."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._get_json, endpoint)
        except Exception as e:
            self._errors.report_error(e, f"API Call: {endpoint}")
            return None

    def _notify(self, message: str) -> None:
        if self._toasts is not None:
            self._toasts.show_toast("error", message)

    async def _collection(self, endpoint: str, label: str) -> list[dict]:
        data = await self.api_call(endpoint)
        if not isinstance(data, list):
            self._notify(f"Could not load {label}. Please try again later.")
            return []
        items = [item for item in data if isinstance(item, dict)]
        if len(items) != len(data):
            logger.warning("Dropped %d malformed %s records", len(data) - len(items), label)
        return items

    async def fetch_achievements(self) -> list[dict]:
        items = await self._collection("/api/achievements", "achievements")
        return sorted(items, key=_order_key)

    async def fetch_projects(self) -> list[dict]:
        return await self._collection("/api/projects", "projects")

    async def fetch_resume_url(self) -> Optional[str]:
        data = await self.api_call("/api/resume")
        if not isinstance(data, dict) or not data.get("url"):
            self._notify("Resume link is unavailable right now.")
            return None
        return data["url"]

    def close(self) -> None:
        self._http.close()
