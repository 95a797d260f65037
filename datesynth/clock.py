"""
Clock Provider Module

Process-wide source of "now" for every date entry point:
- Defaults to the system wall clock (``datetime.now``)
- Replaceable for reproducible generation sessions
- Context manager for pinning the clock inside a block

Thread-safety: the binding is a plain module global. Set it before spawning
concurrent generation work and do not change it while other threads read it.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator
import logging

logger = logging.getLogger(__name__)

ClockFunc = Callable[[], datetime]

_system_clock: ClockFunc = datetime.now
_clock: ClockFunc = _system_clock


def now() -> datetime:
    """Read the current instant from the process-wide clock"""
    return _clock()


def get_clock() -> ClockFunc:
    """Get the currently bound clock function"""
    return _clock


def set_clock(clock: ClockFunc) -> ClockFunc:
    """
    Bind a new process-wide clock

    Args:
        clock: Zero-argument callable returning a datetime

    Returns:
        The previously bound clock, so callers can restore it
    """
    global _clock

    if not callable(clock):
        raise TypeError(f"clock must be callable, got {type(clock).__name__}")

    previous = _clock
    _clock = clock
    logger.debug(f"Clock provider set to {clock!r}")
    return previous


def reset_clock():
    """Restore the system wall clock"""
    set_clock(_system_clock)


def fixed(instant: datetime) -> ClockFunc:
    """Build a clock function that always returns ``instant``"""
    def _fixed_clock() -> datetime:
        return instant

    return _fixed_clock


@contextmanager
def frozen_clock(instant: datetime) -> Iterator[datetime]:
    """
    Pin the process-wide clock to ``instant`` for the duration of a block

    Example:
        with frozen_clock(datetime(2020, 1, 1)):
            generator.past()
    """
    previous = set_clock(fixed(instant))
    try:
        yield instant
    finally:
        set_clock(previous)
