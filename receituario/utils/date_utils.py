"""
Date utility functions for common date operations.
"""

import time


def now_ms() -> int:
    """Returns the current time as milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
