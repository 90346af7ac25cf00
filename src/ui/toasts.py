"""Toast notifications with independent auto-expiry.

Toasts are displayed together, oldest first. Each one schedules its own
removal when shown; dismissing it earlier leaves that timer in place, and
the late removal finds nothing to do.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from html import escape
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 5000


class ToastType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Toast:
    id: str
    type: ToastType
    message: str
    duration: int = DEFAULT_DURATION_MS


_STYLES = {
    ToastType.SUCCESS: ("border-green-400 text-green-400", "rgba(34, 197, 94, 0.2)"),
    ToastType.ERROR: ("border-red-400 text-red-400", "rgba(239, 68, 68, 0.2)"),
    ToastType.INFO: ("border-cyan-400 text-cyan-400", "rgba(6, 182, 212, 0.2)"),
}


def _new_id() -> str:
    return uuid.uuid4().hex[:9]


class ToastQueue:
    """Ordered collection of visible toasts.

    Args:
        loop: Event loop for expiry timers; the running loop when omitted.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._toasts: list[Toast] = []
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._listeners: list[Callable[[list[Toast]], None]] = []

    @property
    def toasts(self) -> list[Toast]:
        return list(self._toasts)

    def __len__(self) -> int:
        return len(self._toasts)

    def subscribe(self, listener: Callable[[list[Toast]], None]) -> Callable[[], None]:
        """Register ``listener`` for queue changes; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        snapshot = self.toasts
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("toast listener failed")

    def show_toast(
        self,
        type: ToastType | str,
        message: str,
        duration: int = DEFAULT_DURATION_MS,
    ) -> str:
        """Append a toast and schedule its removal after ``duration`` ms.

        Returns:
            The new toast's id.
        """
        toast = Toast(id=_new_id(), type=ToastType(type), message=message, duration=duration)
        self._toasts.append(toast)
        loop = self._loop or asyncio.get_running_loop()
        self._timers[toast.id] = loop.call_later(
            duration / 1000, self._expire, toast.id
        )
        self._changed()
        return toast.id

    def _expire(self, toast_id: str) -> None:
        self._timers.pop(toast_id, None)
        self.remove_toast(toast_id)

    def remove_toast(self, toast_id: str) -> None:
        """Remove the toast with ``toast_id``; absent ids are ignored."""
        remaining = [t for t in self._toasts if t.id != toast_id]
        if len(remaining) == len(self._toasts):
            return
        self._toasts = remaining
        self._changed()

    def pending_timers(self) -> int:
        return len(self._timers)

    def render(self) -> str:
        items = []
        for toast in self._toasts:
            classes, glow = _STYLES[toast.type]
            items.append(
                f'<div class="toast toast-{toast.type.value} flex items-center gap-3 p-4 '
                f'rounded-lg border bg-gray-900/90 {classes}" '
                f'style="box-shadow: 0 0 20px {glow}" data-toast-id="{toast.id}">'
                f'<div class="flex-1 text-sm font-medium">{escape(toast.message)}</div>'
                f'<button class="toast-dismiss" data-dismiss="{toast.id}">&times;</button>'
                "</div>"
            )
        return f'<div class="fixed top-20 right-4 space-y-2">{"".join(items)}</div>'
