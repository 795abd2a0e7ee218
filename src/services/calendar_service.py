"""Month-grid calendar built from parsed festival date ranges.

Weeks start on Monday.  Each day cell lists at most ``max_per_day``
festivals (in ranking order) plus a count of the ones that did not fit.
Festivals whose ``dates`` string cannot be parsed are left out here but
still appear in the list views.
"""

from __future__ import annotations

import calendar
import datetime
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models.festival import FestivalEvent, MatchResult
from src.services.date_range_parser import DateRangeParser
from src.utils.errors import ValidationError

MONTH_TITLES = (
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
)

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CalendarEntry(BaseModel):
    model_config = _CAMEL

    id: str
    name: str
    city: str
    country: str
    website: str
    match_class: str


class CalendarDay(BaseModel):
    model_config = _CAMEL

    date: datetime.date
    day: int
    entries: list[CalendarEntry] = Field(default_factory=list)
    overflow: int = 0


class CalendarMonth(BaseModel):
    model_config = _CAMEL

    year: int
    month: int
    title: str
    leading_blanks: int
    trailing_blanks: int
    days: list[CalendarDay]


def expand_events(results: Iterable[MatchResult], parser: DateRangeParser, year: int | None = None) -> list[FestivalEvent]:
    """Pair every festival with each date range its ``dates`` string yields."""
    return [
        FestivalEvent(festival=result, start_date=r.start_date, end_date=r.end_date)
        for result in results
        for r in parser.parse(result.dates, year)
    ]


class CalendarService:
    """Lays festival events out on a month grid."""

    def __init__(self, parser: DateRangeParser | None = None, max_per_day: int = 3) -> None:
        self._parser = parser or DateRangeParser()
        self._max_per_day = max_per_day

    def build_month(self, results: Iterable[MatchResult], year: int, month: int) -> CalendarMonth:
        if not 1 <= month <= 12:
            raise ValidationError(message=f"Month must be between 1 and 12, got {month}")
        if not datetime.MINYEAR <= year <= datetime.MAXYEAR:
            raise ValidationError(message=f"Invalid year {year}")

        first_weekday, days_in_month = calendar.monthrange(year, month)
        events = expand_events(results, self._parser, year)

        days: list[CalendarDay] = []
        for day_number in range(1, days_in_month + 1):
            day = datetime.date(year, month, day_number)
            on_day = [e.festival for e in events if e.start_date <= day <= e.end_date]
            days.append(CalendarDay(
                date=day,
                day=day_number,
                entries=[
                    CalendarEntry(
                        id=f.id,
                        name=f.name,
                        city=f.city,
                        country=f.country,
                        website=f.website,
                        match_class=f.match_class,
                    )
                    for f in on_day[: self._max_per_day]
                ],
                overflow=max(0, len(on_day) - self._max_per_day),
            ))

        # calendar.monthrange already counts Monday as weekday 0.
        total_cells = first_weekday + days_in_month
        return CalendarMonth(
            year=year,
            month=month,
            title=f"{MONTH_TITLES[month - 1]} {year}",
            leading_blanks=first_weekday,
            trailing_blanks=(7 - total_cells % 7) % 7,
            days=days,
        )
