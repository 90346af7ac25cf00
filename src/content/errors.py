"""Process-wide reporting of unhandled errors."""

from __future__ import annotations

import asyncio
import logging
import traceback
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, TypeVar

from . import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_REPORTS = 100


@dataclass(frozen=True)
class ErrorReport:
    message: str
    stack: Optional[str]
    timestamp: str
    environment: str
    context: str


def _build_report(error: BaseException | None, message: str, context: str) -> ErrorReport:
    stack = None
    if error is not None:
        stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return ErrorReport(
        message=message,
        stack=stack,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment="production" if settings.is_production() else "development",
        context=context,
    )


class GlobalErrorHandler:
    """Catches exceptions that escape tasks and callbacks on the event loop."""

    def __init__(self, max_reports: int = MAX_REPORTS) -> None:
        self.initialized = False
        # most recent reports only; older ones remain in the log
        self.reports: deque[ErrorReport] = deque(maxlen=max_reports)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._previous: Optional[Callable[..., Any]] = None

    def initialize(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if self.initialized:
            return
        self._loop = loop or asyncio.get_running_loop()
        self._previous = self._loop.get_exception_handler()
        self._loop.set_exception_handler(self._handle_loop_error)
        self.initialized = True
        logger.info("Global error handler initialized")

    def cleanup(self) -> None:
        if self._loop is not None:
            self._loop.set_exception_handler(self._previous)
        self._loop = None
        self._previous = None
        self.initialized = False

    def _handle_loop_error(
        self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]
    ) -> None:
        error = context.get("exception")
        message = str(error) if error is not None else context.get("message", "Unhandled error")
        kind = "Promise Rejection" if "future" in context or "task" in context else "Unhandled Error"
        self._log(kind, _build_report(error, message, kind))

    def report_error(self, error: BaseException, context: Optional[str] = None) -> ErrorReport:
        report = _build_report(error, str(error), context or "Manual Report")
        self._log(report.context, report)
        return report

    def _log(self, kind: str, report: ErrorReport) -> None:
        self.reports.append(report)
        logger.error("[%s] %s", kind, report.message, extra={"error_report": asdict(report)})


async def safe_async(
    handler: GlobalErrorHandler,
    operation: Callable[[], Awaitable[T]],
    fallback: Optional[T] = None,
    context: Optional[str] = None,
) -> Optional[T]:
    """Await ``operation()``, reporting any failure and returning ``fallback``."""
    try:
        return await operation()
    except Exception as e:
        handler.report_error(e, context)
        return fallback


def safe_call(
    handler: GlobalErrorHandler,
    operation: Callable[[], T],
    fallback: Optional[T] = None,
    context: Optional[str] = None,
) -> Optional[T]:
    try:
        return operation()
    except Exception as e:
        handler.report_error(e, context)
        return fallback
