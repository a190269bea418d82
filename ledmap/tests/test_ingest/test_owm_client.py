"""Tests for the OpenWeatherMap client with mocked httpx."""

import json
from pathlib import Path

import httpx
import pytest
import respx

from ledmap.config.schema import Units
from ledmap.ingest.owm_client import OwmClient, OwmClientError

FIXTURE_DIR = Path(__file__).parent.parent / "fixtures"
BASE_URL = "https://test-owm.example.com"


@pytest.fixture
def owm():
    client = OwmClient("test-key", base_url=BASE_URL, timeout=5.0)
    yield client
    client.close()


@pytest.fixture
def cairns_weather() -> dict:
    with open(FIXTURE_DIR / "owm_weather_cairns.json") as f:
        return json.load(f)


class TestOwmClient:
    def test_requires_api_key(self):
        with pytest.raises(OwmClientError):
            OwmClient("")

    @respx.mock
    def test_current_weather(self, owm: OwmClient, cairns_weather: dict):
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=cairns_weather)
        )

        result = owm.get_current_weather("2172797")
        assert result["main"]["feels_like"] == 91.4

        params = route.calls[0].request.url.params
        assert params["appid"] == "test-key"
        assert params["id"] == "2172797"
        assert params["units"] == "imperial"

    @respx.mock
    def test_forecast_endpoint(self, owm: OwmClient):
        route = respx.get(f"{BASE_URL}/forecast").mock(
            return_value=httpx.Response(200, json={"list": []})
        )
        assert owm.get_forecast("42") == {"list": []}
        assert route.called

    @respx.mock
    def test_units_parameter(self):
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json={})
        )
        with OwmClient("k", base_url=BASE_URL, units=Units.METRIC) as client:
            client.get_current_weather("1")
        assert route.calls[0].request.url.params["units"] == "metric"

    @respx.mock
    def test_user_agent_header(self, owm: OwmClient):
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json={})
        )
        owm.get_current_weather("1")
        assert "ledmap" in route.calls[0].request.headers["user-agent"]

    @respx.mock
    def test_error_status_raises_without_retry(self, owm: OwmClient):
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(503)
        )
        with pytest.raises(httpx.HTTPStatusError):
            owm.get_current_weather("1")
        assert route.call_count == 1

    @respx.mock
    def test_unauthorized(self, owm: OwmClient):
        respx.get(f"{BASE_URL}/forecast").mock(return_value=httpx.Response(401))
        with pytest.raises(httpx.HTTPStatusError):
            owm.get_forecast("1")

    @respx.mock
    def test_request_error_propagates(self, owm: OwmClient):
        respx.get(f"{BASE_URL}/weather").mock(
            side_effect=httpx.ConnectError("boom")
        )
        with pytest.raises(httpx.RequestError):
            owm.get_current_weather("1")

    def test_shared_http_client_not_closed(self):
        http = httpx.Client()
        with OwmClient("k", http=http):
            pass
        assert not http.is_closed
        http.close()

    def test_owned_http_client_closed(self):
        client = OwmClient("k")
        client.close()
        assert client._http.is_closed
