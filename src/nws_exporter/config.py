"""Configuration settings loaded from environment variables."""

from pydantic import field_validator
from pydantic_settings import BaseSettings

from . import __version__


class ExporterConfig(BaseSettings):
    """NWS exporter configuration.

    Every field can be overridden by a ``NWS_``-prefixed environment variable
    and then by the matching command-line flag.
    """

    station: str = "KPHL"
    address: str = "api.weather.gov"
    scheme: str = "https"
    listen_address: str = ":8080"
    timeout_seconds: int = 10
    backoff_seconds: int = 100
    fail_fast: bool = False
    verbose: bool = False
    user_agent: str = f"nws-exporter/{__version__}"
    log_level: str = "INFO"

    model_config = {"env_prefix": "NWS_"}

    @field_validator("station")
    @classmethod
    def validate_station(cls, v: str) -> str:
        """Station identifiers are upper-case ICAO codes (e.g. "KPHL")."""
        v = v.strip().upper()
        if not v:
            raise ValueError("station must not be empty")
        return v

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Accept a bare hostname, optionally with a port."""
        v = v.strip().rstrip("/")
        if not v or "/" in v:
            raise ValueError("address must be a hostname, e.g. api.weather.gov")
        return v

    @field_validator("timeout_seconds", "backoff_seconds")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive number of seconds")
        return v

    @field_validator("listen_address")
    @classmethod
    def validate_listen_address(cls, v: str) -> str:
        """Ensure listen address has the ``[host]:port`` form."""
        host, sep, port = v.rpartition(":")
        if not sep or not port.isdigit() or not 0 <= int(port) <= 65535:
            raise ValueError("listen address must look like [host]:port, e.g. :8080")
        return v

    @property
    def listen_host(self) -> str:
        """Host part of the listen address, empty string binds all interfaces."""
        return self.listen_address.rpartition(":")[0].strip("[]")

    @property
    def listen_port(self) -> int:
        return int(self.listen_address.rpartition(":")[2])

    @property
    def observation_url(self) -> str:
        """URL of the latest observation for the configured station."""
        return f"{self.scheme}://{self.address}/stations/{self.station}/observations/latest"


def get_settings() -> ExporterConfig:
    """Load settings from environment."""
    return ExporterConfig()
