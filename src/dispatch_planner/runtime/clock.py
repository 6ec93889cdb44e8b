# dispatch_planner/runtime/clock.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


@dataclass
class FixedClock:
    """Manually advanced clock for tests and replays."""

    current: datetime

    @classmethod
    def utc(cls, y: int, m: int, d: int, hh=0, mm=0, ss=0) -> FixedClock:
        return cls(datetime(y, m, d, hh, mm, ss, tzinfo=UTC))

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> datetime:
        self.current = self.current + timedelta(seconds=seconds)
        return self.current
