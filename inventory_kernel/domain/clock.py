"""
Clock -- source of the generation instant.

Calendar tokens (``{YYYY}``, ``{MM}``, ``{DD}``) are rendered from the
instant returned by ``now_utc()``.  IdentifierService takes a Clock so that
nothing in the kernel reads the system time directly.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone

_DEFAULT_FIXED_INSTANT = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class Clock(ABC):
    """Returns timezone-aware instants; ``now_utc`` is normalized to UTC."""

    @abstractmethod
    def now(self) -> datetime:
        ...

    def now_utc(self) -> datetime:
        return self.now().astimezone(timezone.utc)


class SystemClock(Clock):
    """Wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Frozen clock for tests and reproducible batch runs.

    Returns the same instant until ``set_time`` moves it.  A naive instant
    is taken as UTC, matching how the token resolvers treat naive values.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._instant = self._aware(fixed_time or _DEFAULT_FIXED_INSTANT)

    @staticmethod
    def _aware(instant: datetime) -> datetime:
        if instant.tzinfo is None:
            return instant.replace(tzinfo=timezone.utc)
        return instant

    def now(self) -> datetime:
        return self._instant

    def set_time(self, time: datetime) -> None:
        self._instant = self._aware(time)
