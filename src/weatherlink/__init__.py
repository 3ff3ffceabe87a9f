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

"""Client library for the Davis WeatherLink v2 API"""

from .client import Client, Config
from .errors import (
    ConfigurationError,
    DecodeError,
    StatusError,
    URLBuildError,
    WeatherLinkError,
)
from .signing import canonicalize, make_signature_params, sign, signature
from .types import (
    CurrentResponse,
    HistoricResponse,
    Sensor,
    SensorReadings,
    SensorsResponse,
    Station,
    StationsResponse,
)
from .urls import API_BASE, build_url, format_ids

__version__ = "0.1.0"

__all__ = [
    "Client",
    "Config",
    "ConfigurationError",
    "DecodeError",
    "StatusError",
    "URLBuildError",
    "WeatherLinkError",
    "canonicalize",
    "make_signature_params",
    "sign",
    "signature",
    "CurrentResponse",
    "HistoricResponse",
    "Sensor",
    "SensorReadings",
    "SensorsResponse",
    "Station",
    "StationsResponse",
    "API_BASE",
    "build_url",
    "format_ids",
]
