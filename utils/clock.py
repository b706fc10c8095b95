# utils/clock.py
from datetime import datetime, timezone


class SystemClock:
     """Wall clock returning naive UTC datetimes, matching the DateTime columns."""

     def now(self) -> datetime:
          return datetime.now(timezone.utc).replace(tzinfo=None)


_system_clock = SystemClock()


def get_clock() -> SystemClock:
     """FastAPI dependency; tests override it with a fixed clock."""
     return _system_clock
