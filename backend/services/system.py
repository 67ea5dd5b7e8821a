import logging

import psutil

logger = logging.getLogger(__name__)


def memory_mb() -> float:
    """Resident set size of this process in MB."""
    return psutil.Process().memory_info().rss / 1024**2


def log_mem(msg: str) -> float:
    """Log RSS memory usage in MB with a short message.

    Args:
        msg: Context string to prefix the memory log.

    Returns:
        The logged figure, so callers can compare before and after a render.
    """
    mem = memory_mb()
    logger.info("%s - Memory usage: %.2f MB", msg, mem)
    return mem
