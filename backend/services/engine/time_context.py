"""
Time context shared by every domain generator.

All flags are pure functions of a single timestamp so that generators
called within the same 10-minute window agree with each other.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from core.config import get_settings


@dataclass(frozen=True)
class TimeContext:
    """Coarse time bucket and time-of-day classification."""

    timestamp: datetime

    @property
    def hour(self) -> int:
        return self.timestamp.hour

    @property
    def month(self) -> int:
        return self.timestamp.month

    @property
    def time_seed(self) -> int:
        """hour*100 + minute//10; stable for a 10-minute window."""
        return self.timestamp.hour * 100 + self.timestamp.minute // 10

    @property
    def is_peak_hour(self) -> bool:
        """Commuter peaks, 8-10 AM and 5-8 PM."""
        return 8 <= self.hour <= 10 or 17 <= self.hour <= 20

    @property
    def is_night_time(self) -> bool:
        """Low-traffic night window, 11 PM to 5 AM."""
        return self.hour >= 23 or self.hour <= 5

    @property
    def is_high_call_hour(self) -> bool:
        """Emergency call surge window, 8 PM to 2 AM."""
        return self.hour >= 20 or self.hour <= 2

    @property
    def is_high_risk_hour(self) -> bool:
        """Elevated crime window, 8 PM to 4 AM."""
        return self.hour >= 20 or self.hour <= 4

    @property
    def is_power_peak(self) -> bool:
        """Daytime grid load window, 10 AM to 10 PM."""
        return 10 <= self.hour <= 22

    @property
    def is_water_peak_usage(self) -> bool:
        """Morning and evening water usage peaks."""
        return 6 <= self.hour <= 9 or 18 <= self.hour <= 21

    @property
    def is_summer(self) -> bool:
        """April through September."""
        return 4 <= self.month <= 9


def resolve_time_context(now: Optional[datetime] = None) -> TimeContext:
    """
    Build a time context for ``now``.

    Defaults to the current wall-clock time in the configured city timezone.
    """
    if now is None:
        now = datetime.now(ZoneInfo(get_settings().CITY_TIMEZONE))
    return TimeContext(timestamp=now)
