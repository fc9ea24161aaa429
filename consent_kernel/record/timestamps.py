"""Decisecond normalization for record timestamps."""

from datetime import datetime, timedelta

DECISECOND = timedelta(milliseconds=100)

_TICK_MICROSECONDS = 100_000


def to_deciseconds(value: datetime) -> datetime:
    """
    Round a datetime to the nearest 100 ms tick.

    Ties (exactly 50 ms past a tick) go to the even tick. The timezone of
    ``value`` is preserved, and rounding an already-rounded value is a no-op.
    A round-up that would pass ``datetime.max`` keeps the tick below instead.
    """
    ticks, remainder = divmod(value.microsecond, _TICK_MICROSECONDS)
    half = _TICK_MICROSECONDS // 2
    if remainder > half or (remainder == half and ticks % 2 == 1):
        ticks += 1
    try:
        return value.replace(microsecond=0) + ticks * DECISECOND
    except OverflowError:
        return value.replace(microsecond=(ticks - 1) * _TICK_MICROSECONDS)
