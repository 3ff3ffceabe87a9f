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
Response shapes for the WeatherLink v2 API.

Each endpoint's JSON body is decoded into a small dataclass tree. Fields the
server may omit or send as ``null`` default to ``None``; fields that the
server adds in future are ignored by the dataclasses but remain available in
the ``raw`` attribute of every top-level response.

Current-conditions and historic records vary with the sensor's data
structure type, so their individual readings are kept as plain dicts. Use
``to_dataframe()`` to flatten them into a table.
"""

from dataclasses import dataclass, field, fields
from typing import Any, TypeVar, get_args

import pandas as pd

from .transforms import compose, convert_timestamps, rename_columns, reset_index, sort_values

T = TypeVar("T")

# Columns that lead every readings DataFrame
READINGS_COLUMNS = [
    "station_id",
    "lsid",
    "sensor_type",
    "data_structure_type",
    "date_time",
]


def _expect_object(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object for {what}, got {type(data).__name__}")
    return data


def _expect_list(data: dict, name: str) -> list:
    value = data.get(name)
    if value is None:
        raise ValueError(f"missing '{name}' list")
    if not isinstance(value, list):
        raise ValueError(f"'{name}' should be a list, got {type(value).__name__}")
    return value


def _matches(value: Any, annotation: Any) -> bool:
    if annotation is Any or value is None:
        return True
    for kind in get_args(annotation) or (annotation,):
        # bool subclasses int; only accept it where bool is declared
        if isinstance(value, bool) and kind is not bool:
            continue
        if kind is float and isinstance(value, (int, float)):
            return True
        if kind in (int, str, bool) and isinstance(value, kind):
            return True
    return False


def _typed(data: dict, name: str, annotation: Any) -> Any:
    """Return ``data[name]`` (or None) after checking it against ``annotation``."""
    value = data.get(name)
    if not _matches(value, annotation):
        raise ValueError(
            f"'{name}' should be {annotation}, got {type(value).__name__} {value!r}"
        )
    return value


def _from_fields(cls: type[T], data: Any, what: str) -> T:
    """Populate a flat dataclass from the matching keys of a JSON object."""
    data = _expect_object(data, what)
    return cls(**{f.name: _typed(data, f.name, f.type) for f in fields(cls) if f.init})


# ============================================================================
# STATIONS
# ============================================================================


@dataclass
class Station:
    """Metadata for one weather station."""

    station_id: int | None = None
    station_name: str | None = None
    gateway_id: int | None = None
    gateway_id_hex: str | None = None
    product_number: str | None = None
    username: str | None = None
    user_email: str | None = None
    company_name: str | None = None
    active: bool | None = None
    private: bool | None = None
    recording_interval: int | None = None
    firmware_version: str | None = None
    meid: str | None = None
    registered_date: int | None = None
    subscription_end_date: int | None = None
    time_zone: str | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    elevation: float | None = None


@dataclass
class StationsResponse:
    """Body of ``/stations``."""

    stations: list[Station] = field(default_factory=list)
    generated_at: int | None = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "StationsResponse":
        data = _expect_object(data, "stations response")
        return cls(
            stations=[_from_fields(Station, s, "station") for s in _expect_list(data, "stations")],
            generated_at=_typed(data, "generated_at", int | None),
            raw=data,
        )


# ============================================================================
# SENSORS
# ============================================================================


@dataclass
class Sensor:
    """Metadata for one sensor attached to a station."""

    lsid: int | None = None
    sensor_type: int | None = None
    category: str | None = None
    manufacturer: str | None = None
    product_name: str | None = None
    product_number: str | None = None
    rain_collector_type: int | None = None
    active: bool | None = None
    created_date: int | None = None
    modified_date: int | None = None
    station_id: int | None = None
    station_name: str | None = None
    parent_device_type: str | None = None
    parent_device_name: str | None = None
    parent_device_id: int | None = None
    parent_device_id_hex: str | None = None
    port_number: int | None = None
    latitude: float | None = None
    longitude: float | None = None
    elevation: float | None = None
    tx_id: Any = None


@dataclass
class SensorsResponse:
    """Body of ``/sensors``."""

    sensors: list[Sensor] = field(default_factory=list)
    generated_at: int | None = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "SensorsResponse":
        data = _expect_object(data, "sensors response")
        return cls(
            sensors=[_from_fields(Sensor, s, "sensor") for s in _expect_list(data, "sensors")],
            generated_at=_typed(data, "generated_at", int | None),
            raw=data,
        )


# ============================================================================
# CURRENT AND HISTORIC READINGS
# ============================================================================


@dataclass
class SensorReadings:
    """
    Readings from one sensor.

    ``data`` holds one dict per record. Every record has a ``ts`` (Unix
    seconds); the other keys depend on ``data_structure_type``.
    """

    lsid: int | None = None
    sensor_type: int | None = None
    data_structure_type: int | None = None
    data: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "SensorReadings":
        data = _expect_object(data, "sensor readings")
        records = data.get("data") or []
        if not isinstance(records, list):
            raise ValueError(f"'data' should be a list, got {type(records).__name__}")
        return cls(
            lsid=_typed(data, "lsid", int | None),
            sensor_type=_typed(data, "sensor_type", int | None),
            data_structure_type=_typed(data, "data_structure_type", int | None),
            data=[_expect_object(r, "reading") for r in records],
        )


def _readings_frame(station_id: int | None, sensors: list[SensorReadings]) -> pd.DataFrame:
    rows = [
        {
            "station_id": station_id,
            "lsid": sensor.lsid,
            "sensor_type": sensor.sensor_type,
            "data_structure_type": sensor.data_structure_type,
            "ts": None,
            **record,
        }
        for sensor in sensors
        for record in sensor.data
    ]

    if not rows:
        return pd.DataFrame(columns=READINGS_COLUMNS)

    normalise = compose(
        convert_timestamps("ts", unit="s", utc=True),
        rename_columns({"ts": "date_time"}),
        sort_values(["lsid", "date_time"]),
        reset_index(),
    )
    df = normalise(pd.DataFrame(rows))

    leading = [col for col in READINGS_COLUMNS if col in df.columns]
    return df[leading + [col for col in df.columns if col not in leading]]


@dataclass
class CurrentResponse:
    """Body of ``/current/{station-id}``."""

    station_id: int | None = None
    sensors: list[SensorReadings] = field(default_factory=list)
    generated_at: int | None = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "CurrentResponse":
        data = _expect_object(data, "current response")
        return cls(
            station_id=_typed(data, "station_id", int | None),
            sensors=[SensorReadings.from_dict(s) for s in _expect_list(data, "sensors")],
            generated_at=_typed(data, "generated_at", int | None),
            raw=data,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """One row per reading, with ``date_time`` in UTC."""
        return _readings_frame(self.station_id, self.sensors)


@dataclass
class HistoricResponse:
    """Body of ``/historic/{station-id}``."""

    station_id: int | None = None
    sensors: list[SensorReadings] = field(default_factory=list)
    generated_at: int | None = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "HistoricResponse":
        data = _expect_object(data, "historic response")
        return cls(
            station_id=_typed(data, "station_id", int | None),
            sensors=[SensorReadings.from_dict(s) for s in _expect_list(data, "sensors")],
            generated_at=_typed(data, "generated_at", int | None),
            raw=data,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """One row per archive record, with ``date_time`` in UTC."""
        return _readings_frame(self.station_id, self.sensors)
