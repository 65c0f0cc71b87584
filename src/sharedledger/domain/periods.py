"""Period calendars mapping dates to period keys and back.

Calendars are passed explicitly to whatever needs period bounds or
period ranges; there is no process-wide calendar.
"""

import re
from abc import ABC, abstractmethod
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from sharedledger.domain.entities import PeriodBounds
from sharedledger.domain.errors import ValidationError

MONTH_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


class PeriodCalendar(ABC):
    """Maps calendar dates to opaque period keys."""

    @abstractmethod
    def period_key(self, day: date) -> str:
        """Return the key of the period containing day."""
        pass

    @abstractmethod
    def bounds(self, period_key: str) -> PeriodBounds:
        """Return the inclusive date bounds of a period."""
        pass

    @abstractmethod
    def period_keys_between(self, first_key: str, last_key: str) -> list[str]:
        """Return all period keys from first_key to last_key inclusive."""
        pass


class MonthlyPeriodCalendar(PeriodCalendar):
    """Gregorian calendar months, keyed as 'YYYY-MM'."""

    def period_key(self, day: date) -> str:
        return f"{day.year:04d}-{day.month:02d}"

    def bounds(self, period_key: str) -> PeriodBounds:
        start = self._month_start(period_key)
        end = start + relativedelta(months=1) - timedelta(days=1)
        return PeriodBounds(start=start, end=end)

    def period_keys_between(self, first_key: str, last_key: str) -> list[str]:
        current = self._month_start(first_key)
        last = self._month_start(last_key)
        if current > last:
            raise ValidationError(
                f"Period '{first_key}' is after period '{last_key}'"
            )

        keys = []
        while current <= last:
            keys.append(self.period_key(current))
            current += relativedelta(months=1)
        return keys

    def year_period_keys(self, year: int) -> list[str]:
        """Return the twelve month keys of a year."""
        return [f"{year:04d}-{month:02d}" for month in range(1, 13)]

    def _month_start(self, period_key: str) -> date:
        match = MONTH_KEY_PATTERN.match(period_key.strip())
        if match is None:
            raise ValidationError(
                f"Invalid period '{period_key}'. Expected format YYYY-MM"
            )
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValidationError(f"Invalid month in period '{period_key}'")
        return date(year, month, 1)
