"""HTTP endpoint exposing the gauges to Prometheus scrapers."""

import logging
import threading
from wsgiref.simple_server import WSGIServer

from prometheus_client import start_http_server

from .metrics import MetricSet

logger = logging.getLogger(__name__)


class MetricsServer:
    """Serves a MetricSet's registry from prometheus_client's WSGI server.

    Scrapes are answered on the server's own daemon threads and never wait
    on the poller. IPv4 or IPv6 is chosen from the bind host.
    """

    def __init__(self, metrics: MetricSet, host: str = "", port: int = 8080) -> None:
        """Initialize metrics server.

        Args:
            metrics: Gauges to expose.
            host: Interface to bind, empty string for all IPv4 interfaces.
            port: TCP port, 0 picks a free one.
        """
        self.metrics = metrics
        self.host = host or "0.0.0.0"
        self.port = port
        self._httpd: WSGIServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def server_port(self) -> int:
        """Port actually bound, useful when started with port 0."""
        if self._httpd is None:
            raise RuntimeError("metrics server is not running")
        return self._httpd.server_port

    def start(self) -> None:
        """Bind the socket and start serving in a daemon thread.

        Raises:
            OSError: If the address cannot be bound or resolved.
        """
        if self._httpd is not None:
            return
        self._httpd, self._thread = start_http_server(
            self.port, addr=self.host, registry=self.metrics.registry
        )
        logger.debug("Metrics server bound to %s port %d", self.host, self.server_port)

    def stop(self) -> None:
        """Stop serving and release the socket."""
        if self._httpd is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._httpd = None
        self._thread = None
