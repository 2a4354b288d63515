# gamestore/utils/retry.py
import logging

import redis
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from gamestore.utils.settings import REDIS_RETRY_ATTEMPTS
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)

#tylko bledy polaczenia, ResponseError (zla komenda / typ klucza) nie zniknie po ponowieniu
TRANSIENT_REDIS_ERRORS = (redis.ConnectionError, redis.TimeoutError)


def redis_retry(attempts: int = REDIS_RETRY_ATTEMPTS, max_wait: float = 1.0):
    """Ponawia operacje magazynu sesji klienta przy chwilowej niedostepnosci redisa."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=max_wait),
        retry=retry_if_exception_type(TRANSIENT_REDIS_ERRORS),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
