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
Signed URL construction for the WeatherLink v2 API.

All authentication travels in the query string: the request path (which may
already carry its own query parameters) is combined with the signature
parameter set, signed, and placed under ``https://api.weatherlink.com/v2``.

Example:
    >>> params = {"api-key": "mykey", "foo": "bar", "t": "123"}
    >>> build_url("/foo", params, key="mykey", secret="mysecret")
    'https://api.weatherlink.com/v2/foo?api-key=mykey&api-signature=e576785c250d8c8db2e5fc2b7857b4c39ee56958107b978137e10d0fa6c1bc7b&t=123'
"""

from typing import Any, Iterable, Mapping
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from .errors import URLBuildError
from .signing import KEY_PARAM, SIGNATURE_PARAM, TIMESTAMP_PARAM, signature

# ============================================================================
# CONSTANTS
# ============================================================================

API_SCHEME = "https"
API_HOST = "api.weatherlink.com"
API_VERSION = "v2"
API_BASE = f"{API_SCHEME}://{API_HOST}/{API_VERSION}"

# Endpoint paths, relative to API_BASE
STATIONS_PATH = "/stations/{ids}"
SENSORS_PATH = "/sensors/{ids}"
SENSOR_CATALOG_PATH = "/sensor-catalog"
CURRENT_PATH = "/current/{station_id}"
HISTORIC_PATH = "/historic/{station_id}?start-timestamp={start}&end-timestamp={end}"


# ============================================================================
# HELPERS
# ============================================================================


def format_ids(ids: Iterable[int] | None) -> str:
    """
    Render identifiers as a CSV ID list.

    Example:
        >>> format_ids([2970, 2971])
        '2970,2971'
        >>> format_ids(None)
        ''
    """
    if not ids:
        return ""
    return ",".join(str(int(i)) for i in ids)


def _versioned_path(path: str) -> str:
    # "/stations/" and "stations" both become "/v2/stations"
    segments = [segment for segment in path.split("/") if segment]
    return quote("/".join(["", API_VERSION, *segments]), safe="/,")


# ============================================================================
# URL BUILDER
# ============================================================================


def build_url(path: str, params: Mapping[str, Any], key: str, secret: str) -> str:
    """
    Build a fully qualified, signed request URL.

    Query parameters already present in ``path`` are merged into a copy of
    ``params`` (entries already in ``params`` win), and the signature is
    computed over that merged set. The final query holds the path's own
    parameters plus ``api-signature``, ``api-key`` and ``t``, sorted by name
    and percent-encoded.

    Args:
        path: Endpoint path relative to the API version, e.g.
            ``"/historic/2970?start-timestamp=1&end-timestamp=2"``
        params: Signature parameter set. Must contain ``t``. Not modified.
        key: API key
        secret: API secret, used only to derive the signature

    Returns:
        str: Absolute URL ready for a GET request

    Raises:
        URLBuildError: If the path cannot be parsed, is empty, or no
            timestamp is available
    """
    try:
        parts = urlsplit(path)
        path_query = parse_qsl(parts.query, keep_blank_values=True)
    except ValueError as e:
        raise URLBuildError(f"Invalid request path {path!r}: {e}") from e

    merged = dict(params)
    for name, value in path_query:
        merged.setdefault(name, value)

    if not parts.path:
        raise URLBuildError("Path required.")

    if TIMESTAMP_PARAM not in merged:
        raise URLBuildError(f"Signature parameters must include '{TIMESTAMP_PARAM}'")

    query: dict[str, list[str]] = {}
    for name, value in path_query:
        query.setdefault(name, []).append(value)
    query.setdefault(SIGNATURE_PARAM, []).append(signature(merged, secret))
    query.setdefault(KEY_PARAM, []).append(key)
    query.setdefault(TIMESTAMP_PARAM, []).append(str(merged[TIMESTAMP_PARAM]))

    encoded = urlencode([(name, value) for name in sorted(query) for value in query[name]])

    return urlunsplit((API_SCHEME, API_HOST, _versioned_path(parts.path), encoded, ""))
