"""
Composite date of birth, built from day/month/year edited separately.
"""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Callable, Dict, Optional, Union

QUERY_DATE_FORMAT = "%Y-%m-%d"


class DatePart(str, Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


PART_BOUNDS: Dict[DatePart, tuple[int, int]] = {
    DatePart.DAY: (1, 31),
    DatePart.MONTH: (1, 12),
    DatePart.YEAR: (1900, 2100),
}


def _parse_int(value: Union[str, int, None]) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class DateOfBirth:
    """
    Builder holding an optional partial date.

    Each setter checks only its own field bound. The three parts are kept
    as entered, so the order in which day, month and year arrive never
    changes the outcome. Calendar validity is settled when the composite
    ``value`` is read: a day past the end of the month rolls forward into
    the next month (31 April becomes 1 May).

    The first accepted edit seeds the two untouched parts from ``clock()``.
    """

    def __init__(self, clock: Callable[[], date] = date.today):
        self._clock = clock
        self._parts: Optional[Dict[DatePart, int]] = None

    @property
    def is_set(self) -> bool:
        return self._parts is not None

    def part(self, part: Union[DatePart, str]) -> Optional[int]:
        if self._parts is None:
            return None
        return self._parts[DatePart(part)]

    @property
    def day(self) -> Optional[int]:
        return self.part(DatePart.DAY)

    @property
    def month(self) -> Optional[int]:
        return self.part(DatePart.MONTH)

    @property
    def year(self) -> Optional[int]:
        return self.part(DatePart.YEAR)

    def set_part(self, part: Union[DatePart, str], value: Union[str, int, None]) -> bool:
        """
        Overwrite one field. Returns False, leaving everything as it was,
        when ``value`` is not an integer or is outside the field's bound.

        Raises ValueError for an unknown ``part`` name.
        """
        part = DatePart(part)
        parsed = _parse_int(value)
        if parsed is None:
            return False
        low, high = PART_BOUNDS[part]
        if not low <= parsed <= high:
            return False

        if self._parts is None:
            today = self._clock()
            self._parts = {
                DatePart.DAY: today.day,
                DatePart.MONTH: today.month,
                DatePart.YEAR: today.year,
            }
        self._parts[part] = parsed
        return True

    @property
    def value(self) -> Optional[date]:
        if self._parts is None:
            return None
        first_of_month = date(self._parts[DatePart.YEAR], self._parts[DatePart.MONTH], 1)
        return first_of_month + timedelta(days=self._parts[DatePart.DAY] - 1)

    def isoformat(self) -> Optional[str]:
        composed = self.value
        return composed.strftime(QUERY_DATE_FORMAT) if composed else None

    def __repr__(self) -> str:
        return f"DateOfBirth({self.isoformat()!r})"
