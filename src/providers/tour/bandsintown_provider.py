"""Bandsintown artist-events provider.

Issues ``GET {base}/artists/{name}/events?app_id=..&date=upcoming`` with
an injected ``httpx.AsyncClient``.  The endpoint is rate-limited on the
Bandsintown side, which is why results are cached upstream of this class;
this provider itself never retries.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from src.interfaces.tour_date_provider import ITourDateProvider
from src.utils.errors import ProviderUnavailableError
from src.utils.logging import get_logger

_DEFAULT_BASE_URL = "https://rest.bandsintown.com"
_ARTIST_PAGE_URL = "https://www.bandsintown.com/a/{name}"
_PROVIDER_NAME = "bandsintown"
# Same unescaped set as JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "!~*'()"


class BandsintownProvider(ITourDateProvider):
    """Fetches upcoming events for one artist from the Bandsintown REST API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    app_id:
        Bandsintown ``app_id`` query parameter.
    base_url:
        API root, without trailing slash.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        app_id: str,
        base_url: str = _DEFAULT_BASE_URL,
        timeout: float = 5.0,
    ) -> None:
        self._http = http_client
        self._app_id = app_id
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._logger = get_logger(__name__)

    async def fetch_events(self, artist_name: str) -> list[dict[str, Any]]:
        url = f"{self._base_url}/artists/{quote(artist_name, safe=_URI_COMPONENT_SAFE)}/events"
        params = {"app_id": self._app_id, "date": "upcoming"}

        try:
            response = await self._http.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            self._logger.warning("bandsintown_fetch_failed", artist=artist_name, error=str(exc))
            raise ProviderUnavailableError(
                message=f"Tour lookup failed for {artist_name}: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except ValueError as exc:
            self._logger.warning("bandsintown_invalid_json", artist=artist_name)
            raise ProviderUnavailableError(
                message=f"Tour lookup returned invalid JSON for {artist_name}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        # Unknown artists come back as an object ({"errorMessage": ...}), not a list.
        if not isinstance(body, list):
            self._logger.info("bandsintown_non_list_body", artist=artist_name)
            raise ProviderUnavailableError(
                message=f"Tour lookup returned no event list for {artist_name}",
                provider_name=_PROVIDER_NAME,
            )

        self._logger.debug("bandsintown_fetched", artist=artist_name, events=len(body))
        return body

    def artist_url(self, artist_name: str) -> str:
        return _ARTIST_PAGE_URL.format(name=quote(artist_name, safe=_URI_COMPONENT_SAFE))

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME
