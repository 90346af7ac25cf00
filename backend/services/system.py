import logging
import os

import psutil

logger = logging.getLogger(__name__)


def memory_mb() -> float:
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024**2


def log_mem(msg: str) -> float:
    """Log RSS memory usage in MB with a short message.

    Args:
        msg: Context string to prefix the memory log.

    Returns:
        The measured RSS in MB.
    """
    mem_mb = memory_mb()
    logger.debug("%s - Memory usage: %.2f MB", msg, mem_mb)
    return mem_mb
