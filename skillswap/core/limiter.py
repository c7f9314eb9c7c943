"""Rate limiting configuration.

Counters are kept in process memory and keyed by client address, so each
server instance enforces its own quota.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from skillswap.constants.http import RATE_LIMIT_STORAGE_URL
from skillswap.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=settings.RATE_LIMIT_ENDPOINTS["default"],
    storage_uri=RATE_LIMIT_STORAGE_URL,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)
