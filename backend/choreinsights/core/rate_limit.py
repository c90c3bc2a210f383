"""Shared rate limiter instance.

Storage is taken from ``RATE_LIMIT_STORAGE_URI`` so several API workers can
share counters (e.g. ``redis://...``). The default is in-memory storage,
which is what development and tests use.
"""

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)


def _create_limiter() -> Limiter:
    from choreinsights.config import settings

    logger.info("Rate limiter: storage %s", settings.RATE_LIMIT_STORAGE_URI)
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.RATE_LIMIT_DEFAULT],
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    )


limiter = _create_limiter()
