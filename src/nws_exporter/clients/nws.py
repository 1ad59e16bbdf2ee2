"""NOAA NWS (National Weather Service) API client."""

import logging

import httpx
from pydantic import ValidationError

from ..config import ExporterConfig
from ..schemas import Observation, ObservationResponse

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when the latest observation cannot be retrieved or decoded."""


class NWSClient:
    """HTTP client for the latest observation of a single NWS station.

    Every failure mode of a fetch (connection error, timeout, non-2xx status,
    undecodable body) surfaces as a FetchError with a readable message.
    """

    def __init__(
        self,
        config: ExporterConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize NWS client.

        Args:
            config: Exporter configuration settings.
            http_client: Optional custom HTTP client for testing.
        """
        self.config = config or ExporterConfig()
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client with required User-Agent."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=float(self.config.timeout_seconds),
                follow_redirects=True,
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": "application/geo+json",
                },
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def fetch_observation(self) -> tuple[Observation, bytes]:
        """Fetch the latest observation for the configured station.

        Returns:
            Tuple of (parsed observation, raw response body).

        Raises:
            FetchError: If the request fails or the body cannot be decoded.
        """
        url = self.config.observation_url

        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise FetchError(
                f"request to {url} timed out after {self.config.timeout_seconds}s"
            ) from e
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"unexpected status {e.response.status_code} from {url}"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(f"request to {url} failed: {e}") from e

        raw = response.content
        logger.debug("Received %d bytes from %s", len(raw), url)

        try:
            document = ObservationResponse.model_validate_json(raw)
        except ValidationError as e:
            raise FetchError(
                f"could not decode observation from {url}: {e.error_count()} validation error(s)"
            ) from e

        return document.properties, raw
