"""
Thread-safe rate-limited logging.

Used for messages that would otherwise repeat on every resolution, such as
records dropped because their coin type has no registered address format.
"""
import logging
import threading
from typing import Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)


class RateLimitedLog:
    """
    Logs each distinct message at most once per ``interval`` seconds.

    Each instance keeps its own cache, so two clients never suppress each
    other's messages.
    """

    def __init__(
        self,
        interval: int = 600,
        maxsize: int = 256,
        logger_instance: Optional[logging.Logger] = None
    ):
        self._seen = TTLCache(maxsize=maxsize, ttl=interval)
        self._lock = threading.RLock()
        self.logger = logger_instance or logger

    def log(self, message: str, level: str = "warning") -> bool:
        """
        Log a message unless it was logged within the interval.

        Args:
            message: Message to log
            level: Log level (debug, info, warning, error, critical)

        Returns:
            True if the message was emitted, False if it was suppressed
        """
        log_method = getattr(self.logger, level.lower(), self.logger.warning)
        key = f"{level}:{message}"

        with self._lock:
            if key in self._seen:
                return False
            log_method(message)
            self._seen[key] = True
        return True
