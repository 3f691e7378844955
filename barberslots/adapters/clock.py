"""
Wall-clock adapter.
"""

import pendulum
from pendulum import DateTime


class SystemClock:
    """Clock backed by the system time in the shop's timezone."""

    def __init__(self, timezone: str = "Europe/Berlin"):
        self.timezone = timezone

    def now(self) -> DateTime:
        return pendulum.now(self.timezone)
