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
Exception types raised by the WeatherLink client.

Every failure the client can detect locally has its own type so callers can
tell a bad configuration from a rejected request or an unreadable response.
Network failures are not wrapped: they surface as the ``requests`` exceptions
raised by the transport.
"""


class WeatherLinkError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(WeatherLinkError, ValueError):
    """API key or secret missing when the client is built."""


class URLBuildError(WeatherLinkError, ValueError):
    """A request path could not be turned into a signed URL."""


class StatusError(WeatherLinkError):
    """
    The API answered with anything other than 200 OK.

    The response body is left unread; only the status line is kept.

    Attributes:
        operation: Name of the client operation that made the request
        status_code: HTTP status code returned by the server
        reason: HTTP reason phrase (may be empty)
        response: The ``requests.Response`` object, if available
    """

    def __init__(self, operation: str, status_code: int, reason: str = "", response=None):
        self.operation = operation
        self.status_code = status_code
        self.reason = reason or ""
        self.response = response
        super().__init__(
            f"Error making {operation} request. Got status: {self.status}"
        )

    @property
    def status(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


class DecodeError(WeatherLinkError, ValueError):
    """The response body was not valid JSON or did not have the expected shape."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"Error decoding {operation} response: {message}")
