"""OpenWeatherMap API client holding a scoped HTTP client."""

import logging

import httpx

from ledmap.config.schema import OWM_BASE_URL, Units

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "ledmap/0.1.0"


class OwmClientError(Exception):
    """Raised when the client is misconfigured."""


class OwmClient:
    """Thin wrapper around the OpenWeatherMap 2.5 REST API.

    Owns one httpx.Client for its lifetime; pass `http` to share a client
    (the caller then remains responsible for closing it). Failed requests
    propagate as httpx errors without retrying.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = OWM_BASE_URL,
        units: Units = Units.IMPERIAL,
        timeout: float = 120.0,
        http: httpx.Client | None = None,
    ):
        if not api_key:
            raise OwmClientError("OpenWeatherMap API key not set")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.units = units
        self.timeout = timeout
        self._owns_http = http is None
        self._http = http or httpx.Client(
            timeout=timeout, headers={"User-Agent": DEFAULT_USER_AGENT}
        )

    def get_current_weather(self, location_id: str) -> dict:
        """Fetch the current observation for a city id."""
        return self._get("weather", location_id)

    def get_forecast(self, location_id: str) -> dict:
        """Fetch the 5 day / 3 hour forecast for a city id."""
        return self._get("forecast", location_id)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "OwmClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get(self, endpoint: str, location_id: str) -> dict:
        url = f"{self.base_url}/{endpoint}"
        params = {
            "appid": self.api_key,
            "id": location_id,
            "units": self.units.value,
        }
        try:
            resp = self._http.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "OWM %s error for id=%s: %d", endpoint, location_id,
                e.response.status_code,
            )
            raise
        except httpx.RequestError as e:
            logger.error("OWM %s request failed for id=%s: %s", endpoint, location_id, e)
            raise
