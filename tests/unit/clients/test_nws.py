"""Unit tests for NWS client."""

import httpx
import pytest
import respx

from nws_exporter.clients.nws import FetchError, NWSClient
from nws_exporter.config import ExporterConfig


@pytest.fixture
def nws_client(exporter_config: ExporterConfig) -> NWSClient:
    """NWS client for testing."""
    return NWSClient(config=exporter_config)


class TestFetchObservation:
    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_success(
        self, nws_client: NWSClient, observation_url: str, sample_observation_document: dict
    ):
        """Test fetching and decoding the latest observation."""
        respx.get(observation_url).mock(
            return_value=httpx.Response(200, json=sample_observation_document)
        )

        obs, raw = await nws_client.fetch_observation()

        assert obs.measurement("temperature") == 3.9
        assert obs.measurement("wind_direction") == 250
        assert b'"timestamp"' in raw

    @respx.mock
    @pytest.mark.asyncio
    async def test_sends_user_agent(
        self, nws_client: NWSClient, observation_url: str, sample_observation_document: dict
    ):
        """Test the NWS-required headers are sent."""
        route = respx.get(observation_url).mock(
            return_value=httpx.Response(200, json=sample_observation_document)
        )

        await nws_client.fetch_observation()

        request = route.calls.last.request
        assert request.headers["User-Agent"] == nws_client.config.user_agent
        assert request.headers["Accept"] == "application/geo+json"

    @respx.mock
    @pytest.mark.asyncio
    async def test_http_error_status(self, nws_client: NWSClient, observation_url: str):
        """Test non-2xx responses raise FetchError."""
        respx.get(observation_url).mock(return_value=httpx.Response(500))

        with pytest.raises(FetchError, match="unexpected status 500"):
            await nws_client.fetch_observation()

    @respx.mock
    @pytest.mark.asyncio
    async def test_not_found(self, nws_client: NWSClient, observation_url: str):
        """Test an unknown station raises FetchError."""
        respx.get(observation_url).mock(return_value=httpx.Response(404))

        with pytest.raises(FetchError, match="404"):
            await nws_client.fetch_observation()

    @respx.mock
    @pytest.mark.asyncio
    async def test_timeout(self, nws_client: NWSClient, observation_url: str):
        """Test timeouts raise FetchError."""
        respx.get(observation_url).mock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(FetchError, match="timed out after 5s"):
            await nws_client.fetch_observation()

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error(self, nws_client: NWSClient, observation_url: str):
        """Test connection failures raise FetchError with the cause chained."""
        respx.get(observation_url).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(FetchError, match="failed") as exc_info:
            await nws_client.fetch_observation()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @respx.mock
    @pytest.mark.asyncio
    async def test_invalid_json(self, nws_client: NWSClient, observation_url: str):
        """Test an undecodable body raises FetchError."""
        respx.get(observation_url).mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(FetchError, match="could not decode"):
            await nws_client.fetch_observation()

    @respx.mock
    @pytest.mark.asyncio
    async def test_missing_timestamp(self, nws_client: NWSClient, observation_url: str):
        """Test a document without a timestamp raises FetchError."""
        respx.get(observation_url).mock(
            return_value=httpx.Response(200, json={"properties": {"temperature": None}})
        )

        with pytest.raises(FetchError, match="could not decode"):
            await nws_client.fetch_observation()

    @respx.mock
    @pytest.mark.asyncio
    async def test_custom_address(self, sample_observation_document: dict):
        """Test the configured hostname is used."""
        client = NWSClient(ExporterConfig(station="kjfk", address="nws.example.test"))
        route = respx.get(
            "https://nws.example.test/stations/KJFK/observations/latest"
        ).mock(return_value=httpx.Response(200, json=sample_observation_document))

        await client.fetch_observation()

        assert route.call_count == 1
        await client.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_timeout_set_on_client(
        self, nws_client: NWSClient, observation_url: str, sample_observation_document: dict
    ):
        """Test the configured timeout comes from the shared HTTP client."""
        route = respx.get(observation_url).mock(
            return_value=httpx.Response(200, json=sample_observation_document)
        )

        await nws_client.fetch_observation()

        assert nws_client.http_client.timeout == httpx.Timeout(5.0)
        assert route.calls.last.request.extensions["timeout"]["read"] == 5.0


class TestClose:
    @pytest.mark.asyncio
    async def test_close_releases_client(self, nws_client: NWSClient):
        """Test close drops the lazily created HTTP client."""
        assert nws_client.http_client is not None

        await nws_client.close()

        assert nws_client._http_client is None

    @pytest.mark.asyncio
    async def test_close_without_client(self, nws_client: NWSClient):
        """Test close is a no-op before first use."""
        await nws_client.close()
