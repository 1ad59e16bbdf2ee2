"""Poll-publish loop for the latest NWS observation."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from .clients import FetchError, NWSClient
from .config import ExporterConfig
from .metrics import MetricSet
from .schemas import MEASUREMENT_FIELDS, Observation

logger = logging.getLogger(__name__)


class ObservationPoller:
    """Fetches the station's latest observation and mirrors it into gauges.

    Runs a fixed-interval loop: fetch, publish on success, sleep, repeat.
    Fetch failures are logged and retried after the same interval, or
    re-raised when fail-fast is configured. Gauges are never cleared, so the
    last good values stay published while fetches are failing.
    """

    def __init__(
        self,
        metrics: MetricSet,
        config: ExporterConfig | None = None,
        client: NWSClient | None = None,
    ) -> None:
        """Initialize poller.

        Args:
            metrics: Gauges to publish into, shared with the metrics server.
            config: Exporter configuration.
            client: Optional NWSClient for testing.
        """
        self.metrics = metrics
        self.config = config or ExporterConfig()
        self._client = client

    @property
    def client(self) -> NWSClient:
        """Lazy-initialize NWS client."""
        if self._client is None:
            self._client = NWSClient(self.config)
        return self._client

    def publish(self, observation: Observation, now: datetime | None = None) -> list[str]:
        """Copy an observation's measurements into the gauges.

        Args:
            observation: Freshly fetched observation.
            now: Evaluation time for time_since_update, defaults to wall clock.

        Returns:
            Names of the measurements missing from this observation.
        """
        now = now or datetime.now(timezone.utc)
        self.metrics.set_time_since_update((now - observation.timestamp).total_seconds())

        missing: list[str] = []
        for field, name in MEASUREMENT_FIELDS:
            value = observation.measurement(field)
            if value is None:
                missing.append(name)
                continue
            self.metrics.set_measurement(field, value)

        if missing:
            logger.warning("some properties are missing in the response: %s", missing)
        return missing

    async def run_once(self) -> bool:
        """Fetch and publish once.

        Returns:
            True if an observation was published, False if the fetch failed.

        Raises:
            FetchError: If the fetch failed and fail-fast is enabled.
        """
        try:
            observation, raw = await self.client.fetch_observation()
        except FetchError as e:
            if self.config.fail_fast:
                logger.error("error: %s", e)
                raise
            logger.warning(
                "Problem retrieving from: %s at station %s: %s",
                self.config.address,
                self.config.station,
                e,
            )
            self._log_next_scrape()
            return False

        if self.config.verbose:
            logger.debug("raw json response: %s", raw.decode("utf-8", errors="replace"))

        self.publish(observation)

        if self.config.verbose:
            self._log_next_scrape()
        return True

    async def run_forever(self, shutdown_event: asyncio.Event | None = None) -> None:
        """Poll until shutdown is signaled.

        Without a shutdown event this never returns normally; the only exit
        is a FetchError under fail-fast.
        """
        shutdown_event = shutdown_event or asyncio.Event()
        interval = self.config.backoff_seconds

        logger.info(
            "Polling %s for station %s every %d seconds",
            self.config.address,
            self.config.station,
            interval,
        )
        while not shutdown_event.is_set():
            await self.run_once()

            # Wait for next interval or shutdown
            try:
                await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
                break
            except asyncio.TimeoutError:
                continue

        logger.info("Poller stopped")

    def _log_next_scrape(self) -> None:
        interval = self.config.backoff_seconds
        next_at = datetime.now(timezone.utc) + timedelta(seconds=interval)
        logger.info("Waiting %d seconds, next scrape at %s", interval, next_at.isoformat())

    async def close(self) -> None:
        """Clean up resources."""
        if self._client is not None:
            await self._client.close()
