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
Request signing for the WeatherLink v2 API.

Every request carries an ``api-signature`` query parameter: the HMAC-SHA256
of a canonical string built from all other request parameters, keyed with
the account's API secret. The server recomputes the same value, so the
canonical form must match byte for byte.

The canonical string is the parameter names in sorted order, each followed
immediately by its value, with no separators:

    >>> canonicalize({"t": 123, "api-key": "mykey", "foo": "bar"})
    'api-keymykeyfoobart123'
    >>> len(sign("mysecret", "api-keymykeyfoobart123"))
    64
"""

import hashlib
import hmac
import time
from typing import Any, Mapping

KEY_PARAM = "api-key"
SIGNATURE_PARAM = "api-signature"
TIMESTAMP_PARAM = "t"


def make_signature_params(key: str, timestamp: int | None = None) -> dict[str, str]:
    """
    Build the parameter set every request starts from.

    A new dict is returned on each call, so concurrent requests never share
    parameter state.

    Args:
        key: API key (sent in plaintext)
        timestamp: Unix time in seconds. Defaults to the current time.

    Returns:
        dict[str, str]: ``{"api-key": key, "t": "<unix seconds>"}``
    """
    if timestamp is None:
        timestamp = int(time.time())
    return {KEY_PARAM: key, TIMESTAMP_PARAM: str(int(timestamp))}


def canonicalize(params: Mapping[str, Any]) -> str:
    """
    Concatenate ``name + value`` for every parameter, sorted by name.

    Values are rendered with ``str()``, so integers appear as plain decimal.
    An ``api-signature`` entry is never part of its own input and is skipped.
    """
    return "".join(
        f"{name}{params[name]}" for name in sorted(params) if name != SIGNATURE_PARAM
    )


def sign(secret: str, canonical: str) -> str:
    """Return the lower-case hex HMAC-SHA256 of ``canonical`` keyed by ``secret``."""
    return hmac.new(
        secret.encode("utf-8"),
        canonical.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def signature(params: Mapping[str, Any], secret: str) -> str:
    """
    Compute the ``api-signature`` value for a parameter set.

    Any ``api-signature`` entry already in ``params`` is left out of the
    canonical string.
    """
    return sign(secret, canonicalize(params))
