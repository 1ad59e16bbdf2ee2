"""Main entry point for the NWS Prometheus exporter."""

import argparse
import asyncio
import logging
import signal
import sys
from typing import NoReturn

from pydantic import ValidationError

from . import __version__
from .clients import FetchError
from .config import ExporterConfig
from .metrics import MetricSet
from .poller import ObservationPoller
from .server import MetricsServer

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Flags left unset fall back to ``NWS_*`` environment variables.
    """
    parser = argparse.ArgumentParser(
        prog="nws-exporter",
        description="Export the latest NWS station observation as Prometheus metrics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export KPHL observations on :8080/metrics
  nws-exporter

  # Another station, polled every 5 minutes
  nws-exporter --station KJFK --backofftime 300

  # Exit on the first failed fetch
  nws-exporter --failfast

Environment Variables:
  NWS_STATION             Station identifier (default: KPHL)
  NWS_ADDRESS             NWS API hostname (default: api.weather.gov)
  NWS_LISTEN_ADDRESS      Metrics listen address (default: :8080)
  NWS_TIMEOUT_SECONDS     Request timeout (default: 10)
  NWS_BACKOFF_SECONDS     Seconds between polls (default: 100)
  NWS_FAIL_FAST           Exit on fetch errors (default: false)
  NWS_VERBOSE             Verbose logging (default: false)
        """,
    )

    parser.add_argument("--station", help="NWS station identifier (e.g. KPHL)")
    parser.add_argument("--addr", dest="address", help="NWS API hostname")
    parser.add_argument(
        "--localaddr",
        dest="listen_address",
        help="The address to listen on for HTTP requests (e.g. :8080)",
    )
    parser.add_argument(
        "--timeout", dest="timeout_seconds", type=int, help="Request timeout in seconds"
    )
    parser.add_argument(
        "--backofftime",
        dest="backoff_seconds",
        type=int,
        help="Seconds to wait between polls",
    )
    parser.add_argument(
        "--failfast",
        dest="fail_fast",
        action="store_true",
        default=None,
        help="Exit on the first fetch error",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=None,
        help="Verbose logging, including raw responses",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)
    args.parser = parser
    return args


def build_config(args: argparse.Namespace) -> ExporterConfig:
    """Merge command line overrides onto environment settings.

    Raises:
        ValidationError: If the merged settings are invalid.
    """
    overrides = {
        key: value
        for key, value in vars(args).items()
        if key in ExporterConfig.model_fields and value is not None
    }
    return ExporterConfig(**overrides)


async def run(config: ExporterConfig, metrics: MetricSet) -> None:
    """Run the poller until a shutdown signal arrives.

    Raises:
        FetchError: If a fetch fails while fail-fast is enabled.
    """
    shutdown_event = asyncio.Event()

    def handle_shutdown(sig: signal.Signals) -> None:
        logger.info("Received %s, initiating shutdown...", sig.name)
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, handle_shutdown, sig)

    poller = ObservationPoller(metrics, config)
    try:
        await poller.run_forever(shutdown_event)
    finally:
        await poller.close()


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
    except ValidationError as e:
        args.parser.error(f"invalid configuration: {e}")

    setup_logging("DEBUG" if config.verbose else config.log_level)

    metrics = MetricSet()
    server = MetricsServer(metrics, config.listen_host, config.listen_port)

    logger.info(
        "Starting up, retrieving from %s at station %s", config.address, config.station
    )
    try:
        server.start()
    except OSError as e:
        logger.error("Cannot listen on %s: %s", config.listen_address, e)
        sys.exit(1)
    logger.info("Serving on http://%s/metrics...", config.listen_address)

    exit_code = 0
    try:
        asyncio.run(run(config, metrics))
    except FetchError:
        exit_code = 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        server.stop()

    logger.info("Shutdown complete")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
