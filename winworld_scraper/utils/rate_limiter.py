"""
Fixed-delay request pacing.

Every request waits the same interval before it is issued, whatever page it
targets. There is no burst allowance and no jitter.
"""

from __future__ import annotations

import threading
import time
from typing import Callable


class FixedDelay:
    def __init__(self,
                 delay_secs: float = 3.0,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        """
        Args:
            delay_secs: seconds to suspend before each request
            sleep: blocking sleep function (injectable for tests)
            clock: monotonic clock used to record acquisitions
        """
        self.delay = delay_secs
        self.sleep = sleep
        self.clock = clock
        self.acquired = 0
        self.last = None
        self.lock = threading.Lock()

    def acquire(self):
        # Unconditional: the delay is not reduced by time already elapsed
        if self.delay > 0:
            self.sleep(self.delay)
        with self.lock:
            self.acquired += 1
            self.last = self.clock()
