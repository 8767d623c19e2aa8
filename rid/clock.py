"""Clock, entropy and timestamp helpers.

Everything that reads the wall clock or the system random source goes through
here so that callers can swap in deterministic fakes.
"""

import os
import time
from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_nanos():
    """Current time in nanoseconds since Unix epoch."""
    return time.time_ns()


def random_bytes(n):
    """Cryptographically strong random bytes from the OS."""
    return os.urandom(n)


def to_datetime(epoch_ns):
    """Convert nanoseconds since Unix epoch to an aware UTC datetime."""
    # datetime only keeps microseconds
    return _EPOCH + timedelta(microseconds=epoch_ns // 1_000)


def format_timestamp(epoch_ns=None):
    """Format timestamp as ISO 8601 with microseconds."""
    if epoch_ns is None:
        epoch_ns = now_nanos()
    return to_datetime(epoch_ns).strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"
