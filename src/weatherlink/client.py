# weatherlink: client for the Davis WeatherLink v2 API
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
WeatherLink v2 API client.

A ``Client`` is built from an explicit ``Config`` holding the API key and
secret. Each endpoint method makes exactly one signed GET request and
returns a typed response; nothing is retried or cached.

Example:
    >>> from weatherlink import Config
    >>> client = Config(key="mykey", secret="mysecret").new_client()
    >>> for station in client.all_stations().stations:
    ...     current = client.current(station.station_id)
    ...     print(current.to_dataframe().head())

Errors:
    - ConfigurationError: key or secret missing (raised at construction)
    - URLBuildError: the request path could not be signed
    - StatusError: the server answered with anything but 200 OK
    - DecodeError: the body was not the expected JSON
    - requests.RequestException: transport failures, unchanged
"""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from logging import getLogger
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar

import requests

from .decorators import with_logging
from .errors import ConfigurationError, DecodeError, StatusError
from .signing import make_signature_params
from .types import CurrentResponse, HistoricResponse, SensorsResponse, StationsResponse
from .urls import (
    CURRENT_PATH,
    HISTORIC_PATH,
    SENSOR_CATALOG_PATH,
    SENSORS_PATH,
    STATIONS_PATH,
    build_url,
    format_ids,
)

logger = getLogger(__name__)

T = TypeVar("T")

# Environment variables read by Config.from_env()
KEY_ENV_VAR = "WEATHERLINK_API_KEY"
SECRET_ENV_VAR = "WEATHERLINK_API_SECRET"

DEFAULT_TIMEOUT = 30.0  # seconds
CATALOG_CHUNK_SIZE = 8192  # bytes


# ============================================================================
# CONFIGURATION
# ============================================================================


@dataclass(frozen=True)
class Config:
    """
    Client configuration.

    Attributes:
        key: API key (public identifier, sent with every request)
        secret: API secret (never sent; only used to sign requests)
        session: HTTP transport. A new ``requests.Session`` is used if None.
        timeout: Per-request timeout in seconds, handed to the transport
    """

    key: str
    secret: str
    session: requests.Session | None = None
    timeout: float | None = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """
        Build a configuration from ``WEATHERLINK_API_KEY`` and
        ``WEATHERLINK_API_SECRET``. Keyword arguments override the
        environment (``None`` values are ignored).
        """
        values = {
            "key": os.getenv(KEY_ENV_VAR, ""),
            "secret": os.getenv(SECRET_ENV_VAR, ""),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def new_client(self) -> "Client":
        """Return a client for this configuration."""
        return Client(self)


# ============================================================================
# HELPERS
# ============================================================================


def _unix_seconds(value: datetime | int | float) -> int:
    """Convert a datetime (naive values are UTC) or epoch number to Unix seconds."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return int(value)


# ============================================================================
# CLIENT
# ============================================================================


class Client:
    """
    Signed-request client for the WeatherLink v2 API.

    The configuration is read-only after construction and every call builds
    its own parameters and timestamp, so one client can be shared between
    threads as long as the underlying session can.
    """

    def __init__(self, config: Config):
        if not config.key or not config.secret:
            raise ConfigurationError(
                "WeatherLink API key and secret are required. Pass them in "
                f"Config or set {KEY_ENV_VAR} and {SECRET_ENV_VAR}."
            )

        self._config = config
        self._owns_session = config.session is None
        self._session = config.session or requests.Session()

    @property
    def config(self) -> Config:
        return self._config

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def make_signature_params(self) -> dict[str, str]:
        """Fresh ``api-key`` + ``t`` parameter set for one request."""
        return make_signature_params(self._config.key)

    def build_url(self, path: str, params: dict[str, Any]) -> str:
        """Sign ``path`` with ``params`` and return the absolute URL."""
        return build_url(path, params, self._config.key, self._config.secret)

    def _get(
        self,
        operation: str,
        path: str,
        params: dict[str, Any] | None = None,
        stream: bool = False,
    ) -> requests.Response:
        if params is None:
            params = self.make_signature_params()

        url = self.build_url(path, params)
        logger.debug(f"GET {path} ({operation})")

        response = self._session.get(url, timeout=self._config.timeout, stream=stream)

        if response.status_code != requests.codes.ok:
            response.close()
            raise StatusError(
                operation, response.status_code, response.reason, response=response
            )

        return response

    def _get_json(
        self,
        operation: str,
        path: str,
        params: dict[str, Any],
        decode: Callable[[Any], T],
    ) -> T:
        response = self._get(operation, path, params)

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(operation, f"invalid JSON ({e})") from e

        try:
            return decode(body)
        except (ValueError, TypeError) as e:
            raise DecodeError(operation, str(e)) from e

    # ------------------------------------------------------------------
    # Stations
    # ------------------------------------------------------------------

    def all_stations(self) -> StationsResponse:
        """All weather stations associated with the API key."""
        return self.stations(None)

    @with_logging()
    def stations(self, ids: Iterable[int] | None = None) -> StationsResponse:
        """
        Weather stations for the given station IDs.

        Args:
            ids: Station IDs. None or empty returns every station.
        """
        ids = list(ids) if ids is not None else []
        csv = format_ids(ids)

        params = self.make_signature_params()
        if ids:
            params["station-ids"] = csv

        return self._get_json(
            "Stations",
            STATIONS_PATH.format(ids=csv),
            params,
            StationsResponse.from_dict,
        )

    # ------------------------------------------------------------------
    # Sensors
    # ------------------------------------------------------------------

    def all_sensors(self) -> SensorsResponse:
        """All sensors attached to every station associated with the API key."""
        return self.sensors(None)

    @with_logging()
    def sensors(self, ids: Iterable[int] | None = None) -> SensorsResponse:
        """
        Sensors for the given sensor IDs (lsid).

        Args:
            ids: Sensor IDs. None or empty returns every sensor.
        """
        ids = list(ids) if ids is not None else []
        csv = format_ids(ids)

        params = self.make_signature_params()
        if ids:
            params["sensor-ids"] = csv

        return self._get_json(
            "Sensors",
            SENSORS_PATH.format(ids=csv),
            params,
            SensorsResponse.from_dict,
        )

    # ------------------------------------------------------------------
    # Readings
    # ------------------------------------------------------------------

    @with_logging()
    def current(self, station_id: int) -> CurrentResponse:
        """Current conditions for one station."""
        station_id = int(station_id)

        params = self.make_signature_params()
        params["station-id"] = str(station_id)

        return self._get_json(
            "Current",
            CURRENT_PATH.format(station_id=station_id),
            params,
            CurrentResponse.from_dict,
        )

    @with_logging()
    def historic(
        self,
        station_id: int,
        start: datetime | int,
        end: datetime | int,
    ) -> HistoricResponse:
        """
        Archive records for one station between ``start`` and ``end``.

        Args:
            station_id: Station ID
            start: Start of the range, as a datetime or Unix seconds.
                Naive datetimes are treated as UTC.
            end: End of the range, same forms as ``start``

        Note:
            The API limits a single request to 24 hours. That limit is
            enforced by the server, which answers longer ranges with an
            error status.
        """
        station_id = int(station_id)

        params = self.make_signature_params()
        params["station-id"] = str(station_id)

        path = HISTORIC_PATH.format(
            station_id=station_id,
            start=_unix_seconds(start),
            end=_unix_seconds(end),
        )

        return self._get_json("Historic", path, params, HistoricResponse.from_dict)

    # ------------------------------------------------------------------
    # Sensor catalog
    # ------------------------------------------------------------------

    @with_logging()
    def sensor_catalog(self, path: str | Path = "sensor-catalog.json") -> Path:
        """
        Download the catalog of every sensor type and save it to ``path``.

        The body is streamed to disk as-is. If the transfer fails part way,
        the partial file is left in place.

        Returns:
            Path: Where the catalog was written
        """
        response = self._get("SensorCatalog", SENSOR_CATALOG_PATH, stream=True)

        target = Path(path)

        with response:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as out:
                for chunk in response.iter_content(chunk_size=CATALOG_CHUNK_SIZE):
                    out.write(chunk)

        logger.info(f"Saved sensor catalog to {target}")
        return target
