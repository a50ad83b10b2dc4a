import functools
import os

from core.errors import PlatformQueryFailure


@functools.lru_cache(maxsize=None)
def clock_ticks_per_second() -> int:
    """USER_HZ, the unit /proc/stat reports cpu times in."""
    try:
        ticks = os.sysconf("SC_CLK_TCK")
    except (AttributeError, ValueError, OSError) as e:
        raise PlatformQueryFailure(f"sysconf(SC_CLK_TCK) failed: {e}") from e

    if ticks <= 0:
        raise PlatformQueryFailure(f"sysconf(SC_CLK_TCK) returned {ticks}")
    return ticks
