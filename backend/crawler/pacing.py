"""
Fixed-delay pacing between successive fetches.
"""
from __future__ import annotations

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


class DelayScheduler:
    """Inserts a fixed wait between fetch operations."""

    def __init__(self, delay: float, *, sleep: Callable[[float], None] = time.sleep) -> None:
        """
        Args:
            delay: Seconds to wait on every call to :meth:`wait`. Zero disables pacing.
            sleep: Sleep function, replaceable in tests.
        """
        self.delay = max(0.0, delay)
        self._sleep = sleep
        self.waits = 0

    def wait(self) -> None:
        """Block for the configured delay before the next fetch."""
        self.waits += 1
        if self.delay > 0:
            logger.debug("Pacing for %.1fs", self.delay)
            self._sleep(self.delay)
