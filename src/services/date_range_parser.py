"""Free-text festival date parser used by the calendar view.

# ─── HOW PARSING WORKS ────────────────────────────────────────────────
#
# Catalog ``dates`` strings are written by hand in Spanish, e.g.
#
#   "Mayo 2026"                  whole month
#   "27 Junio - 4 Julio 2026"    range across two months
#   "17-19 & 24-26 Julio 2026"   several ranges in one month
#   "3-7 Junio 2026"             range within one month
#
# Each shape is a strategy.  Strategies are tried in the order above and
# the first one returning a list wins.  A strategy returns ``None`` when
# its pattern does not match, the month token is not a known month, or a
# day does not exist in that month; the next strategy is then tried.  If
# every strategy declines, the string yields no ranges ("TBA").
#
# The parser never touches match scoring or the catalog; its only
# consumer is calendar_service.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import calendar
import datetime
import re
from abc import ABC, abstractmethod

from src.models.festival import DateRange
from src.utils.text_normalizer import fold_text

MONTHS: dict[str, int] = {
    "enero": 1,
    "febrero": 2,
    "marzo": 3,
    "abril": 4,
    "mayo": 5,
    "junio": 6,
    "julio": 7,
    "agosto": 8,
    "septiembre": 9,
    "octubre": 10,
    "noviembre": 11,
    "diciembre": 12,
}


def month_number(token: str) -> int | None:
    """Return 1-12 for a Spanish month name (any case or accents), else ``None``."""
    return MONTHS.get(fold_text(token))


def _make_date(year: int, month: int, day: int) -> datetime.date | None:
    try:
        return datetime.date(year, month, day)
    except (ValueError, OverflowError):
        return None


def _make_range(start: datetime.date | None, end: datetime.date | None) -> DateRange | None:
    if start is None or end is None or end < start:
        return None
    return DateRange(start_date=start, end_date=end)


# ═════════════════════════════════════════════════════════════════════════
# STRATEGIES
# ═════════════════════════════════════════════════════════════════════════

class DateRangeStrategy(ABC):
    """One recognised shape of festival date string."""

    name: str = ""

    @abstractmethod
    def parse(self, text: str) -> list[DateRange] | None:
        """Return the ranges *text* describes, or ``None`` if this shape does not apply."""


class WholeMonthStrategy(DateRangeStrategy):
    """``"Mayo 2026"``: the first to the last day of the month."""

    name = "whole_month"
    _PATTERN = re.compile(r"^(\w+)\s+(\d{4})$")

    def parse(self, text: str) -> list[DateRange] | None:
        match = self._PATTERN.match(text.strip())
        if not match:
            return None
        month = month_number(match.group(1))
        if month is None:
            return None
        year = int(match.group(2))
        if not datetime.MINYEAR <= year <= datetime.MAXYEAR:
            return None
        last_day = calendar.monthrange(year, month)[1]
        date_range = _make_range(_make_date(year, month, 1), _make_date(year, month, last_day))
        return [date_range] if date_range else None


class CrossMonthStrategy(DateRangeStrategy):
    """``"27 Junio - 4 Julio 2026"``: explicit start and end in different months.

    The year belongs to the end date.  When the start month comes after
    the end month (``"28 Diciembre - 2 Enero 2027"``) the range starts in
    the previous year.
    """

    name = "cross_month"
    _PATTERN = re.compile(r"(\d+)\s+(\w+)\s*-\s*(\d+)\s+(\w+)\s+(\d{4})")

    def parse(self, text: str) -> list[DateRange] | None:
        match = self._PATTERN.search(text)
        if not match:
            return None
        start_month = month_number(match.group(2))
        end_month = month_number(match.group(4))
        if start_month is None or end_month is None:
            return None
        end_year = int(match.group(5))
        start_year = end_year - 1 if start_month > end_month else end_year
        date_range = _make_range(
            _make_date(start_year, start_month, int(match.group(1))),
            _make_date(end_year, end_month, int(match.group(3))),
        )
        return [date_range] if date_range else None


class MultiRangeStrategy(DateRangeStrategy):
    """``"17-19 & 24-26 Julio 2026"``: several day ranges sharing one month.

    Month and year are read once from the whole string; each ``&`` segment
    contributes a ``D-D`` range.  Segments without a day range are
    ignored, but a day range that does not exist in the month rejects the
    whole string.
    """

    name = "multi_range"
    _MONTH_YEAR = re.compile(r"(\w+)\s+(\d{4})")
    _DAY_RANGE = re.compile(r"(\d+)-(\d+)")

    def parse(self, text: str) -> list[DateRange] | None:
        if "&" not in text:
            return None
        month_year = self._MONTH_YEAR.search(text)
        if not month_year:
            return None
        month = month_number(month_year.group(1))
        if month is None:
            return None
        year = int(month_year.group(2))

        ranges: list[DateRange] = []
        for segment in text.split("&"):
            days = self._DAY_RANGE.search(segment.strip())
            if not days:
                continue
            date_range = _make_range(
                _make_date(year, month, int(days.group(1))),
                _make_date(year, month, int(days.group(2))),
            )
            if date_range is None:
                return None
            ranges.append(date_range)
        return ranges or None


class SingleMonthStrategy(DateRangeStrategy):
    """``"3-7 Junio 2026"``: a day range inside one month."""

    name = "single_month"
    _PATTERN = re.compile(r"(\d+)-(\d+)\s+(\w+)\s+(\d{4})")

    def parse(self, text: str) -> list[DateRange] | None:
        match = self._PATTERN.search(text)
        if not match:
            return None
        month = month_number(match.group(3))
        if month is None:
            return None
        year = int(match.group(4))
        date_range = _make_range(
            _make_date(year, month, int(match.group(1))),
            _make_date(year, month, int(match.group(2))),
        )
        return [date_range] if date_range else None


DEFAULT_STRATEGIES: tuple[DateRangeStrategy, ...] = (
    WholeMonthStrategy(),
    CrossMonthStrategy(),
    MultiRangeStrategy(),
    SingleMonthStrategy(),
)


# ═════════════════════════════════════════════════════════════════════════
# PARSER
# ═════════════════════════════════════════════════════════════════════════

class DateRangeParser:
    """Runs strategies in priority order; the first non-``None`` result wins."""

    def __init__(self, strategies: tuple[DateRangeStrategy, ...] = DEFAULT_STRATEGIES) -> None:
        self._strategies = strategies

    def parse(self, text: str | None, year: int | None = None) -> list[DateRange]:
        """Parse *text* into date ranges.

        Args:
            text: Free-text dates from the catalog.
            year: When given, ranges that do not overlap this calendar
                year are dropped.

        Returns:
            Zero or more ranges; empty when nothing matched.
        """
        if not text or not text.strip():
            return []
        for strategy in self._strategies:
            ranges = strategy.parse(text)
            if ranges is not None:
                break
        else:
            return []

        if year is None:
            return ranges
        year_start = datetime.date(year, 1, 1)
        year_end = datetime.date(year, 12, 31)
        return [r for r in ranges if r.start_date <= year_end and r.end_date >= year_start]


_DEFAULT_PARSER = DateRangeParser()


def parse_date_ranges(text: str | None, year: int | None = None) -> list[DateRange]:
    """Parse *text* with the default strategy list.  See :class:`DateRangeParser`."""
    return _DEFAULT_PARSER.parse(text, year)
