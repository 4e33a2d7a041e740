"""
app/flow/cooldown.py

Purpose: Resend cooldown for verification codes

- Counts down in whole seconds from the configured duration to 0
- Keeps running while the guest moves between form and verification
- Deadline-based: nothing to cancel except the deadline itself
"""

import math
import time
from typing import Callable, Optional


class ResendCooldown:
    """
    Countdown started after each code send.

    Args:
        duration: Seconds to count down from
        clock: Monotonic clock in seconds (tests inject a fake one)
    """

    def __init__(self, duration: int = 30, clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self._clock = clock
        self._deadline: Optional[float] = None

    def start(self) -> None:
        """(Re)starts the countdown at the full duration."""
        self._deadline = self._clock() + self.duration

    def clear(self) -> None:
        """Drops the countdown (flow teardown)."""
        self._deadline = None

    @property
    def remaining(self) -> int:
        """Whole seconds left, as a once-per-second countdown would show them."""
        if self._deadline is None:
            return 0
        left = self._deadline - self._clock()
        if left <= 0:
            self._deadline = None
            return 0
        return math.ceil(left)

    @property
    def active(self) -> bool:
        return self.remaining > 0
