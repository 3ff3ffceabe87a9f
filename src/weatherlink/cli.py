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
Command line interface for the WeatherLink v2 API.

Request logic lives in client.py; this module only turns flags into client
calls and prints the results.

Examples:
    weatherlink stations --key KEY --secret SECRET
    weatherlink sensors --id 123,456
    weatherlink current --station 2970
    weatherlink historic --station 2970 --start 2020-06-11T12:00:00Z --end 2020-06-11T13:00:00Z
    weatherlink sensor_catalog --path ./sensor-catalog.json

Credentials default to WEATHERLINK_API_KEY and WEATHERLINK_API_SECRET.
"""

import json
import logging
import sys
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import fire
import requests

from .client import Client, Config
from .errors import WeatherLinkError

__all__ = ["WeatherLinkCLI", "main"]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _parse_ids(value) -> list[int] | None:
    # fire hands over "1,2" as a tuple and "1" as an int
    if value is None or value == "":
        return None
    if isinstance(value, (list, tuple)):
        return [int(v) for v in value]
    if isinstance(value, int):
        return [value]
    return [int(v) for v in str(value).split(",") if v.strip()]


def _parse_time(value) -> datetime | int:
    if isinstance(value, (int, float)):
        return int(value)
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise SystemExit(
            f"Invalid time {value!r}. Use RFC3339, e.g. 2020-06-11T12:00:00Z"
        ) from None


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


class WeatherLinkCLI:
    """Command line tool for the Davis WeatherLink v2 API."""

    def __init__(
        self,
        key: str | None = None,
        secret: str | None = None,
        verbose: bool = False,
    ) -> None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT
        )

        # fire parses numeric-looking flags as numbers
        config = Config.from_env(
            key=str(key) if key is not None else None,
            secret=str(secret) if secret is not None else None,
        )
        self.client: Client = config.new_client()

    def stations(self, id=None) -> None:
        """
        List stations. Without --id, every station on the account.

        Example: weatherlink stations --id 2970,2971
        """
        _print_json(self.client.stations(_parse_ids(id)).raw)

    def sensors(self, id=None) -> None:
        """
        List sensors. Without --id, every sensor on the account.

        Example: weatherlink sensors --id 123
        """
        _print_json(self.client.sensors(_parse_ids(id)).raw)

    def current(self, station: int) -> None:
        """
        Current conditions for a station.

        Example: weatherlink current --station 2970
        """
        _print_json(self.client.current(int(station)).raw)

    def historic(self, station: int, start: str, end: str, output: str | None = None) -> None:
        """
        Historic records for a station. Times are RFC3339 and the span may
        not exceed 24 hours. With --output, records are written as CSV.

        Example: weatherlink historic --station 2970 --start 2020-06-11T12:00:00Z --end 2020-06-11T13:00:00Z
        """
        response = self.client.historic(int(station), _parse_time(start), _parse_time(end))

        if output is None:
            _print_json(response.raw)
            return

        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        response.to_dataframe().to_csv(out_path, index=False)
        print(f"Saved historic data to {out_path}")

    def sensor_catalog(self, path: str = "./sensor-catalog.json") -> None:
        """
        Download the sensor catalog.

        Example: weatherlink sensor_catalog --path ./sensor-catalog.json
        """
        written = self.client.sensor_catalog(path)
        print(f"Saved sensor catalog to {written}")


def main(argv: Sequence[str] | None = None) -> None:
    """Entrypoint used by the console script."""
    command = list(argv) if argv is not None else sys.argv[1:]
    try:
        fire.Fire(WeatherLinkCLI, command=command, name="weatherlink")
    except (WeatherLinkError, requests.RequestException) as e:
        print(e, file=sys.stderr)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
