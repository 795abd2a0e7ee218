"""Current-year lookup.

The server's clock is not trusted to be set correctly on every host, so
at startup the year is taken from a public time API.  Any failure keeps
the system year.  The value is read by ``GET /api/current-year`` and used
as the default calendar year.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable

import httpx

from src.utils.logging import get_logger

_DEFAULT_URL = "http://worldtimeapi.org/api/ip"


def _system_year() -> int:
    return datetime.date.today().year


class CurrentYearService:
    """Holds the current year, refreshed from a time API on demand."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: str = _DEFAULT_URL,
        timeout: float = 5.0,
        system_year: Callable[[], int] = _system_year,
    ) -> None:
        self._http = http_client
        self._url = url
        self._timeout = timeout
        self._year = system_year()
        self._logger = get_logger(__name__)

    @property
    def year(self) -> int:
        return self._year

    async def refresh(self) -> int:
        """Fetch the year from the time API.  Keeps the current value on failure."""
        try:
            response = await self._http.get(self._url, timeout=self._timeout)
            response.raise_for_status()
            # "2026-01-12T10:15:00.123+01:00"
            self._year = int(str(response.json()["datetime"])[:4])
            self._logger.info("current_year_fetched", year=self._year)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            self._logger.warning("current_year_fallback", year=self._year, error=str(exc))
        return self._year
