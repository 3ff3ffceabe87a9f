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
Example usage of the WeatherLink client.

This script:
1. Lists the stations on your account
2. Prints current wind readings for each station
3. Downloads the last half hour of archive records as a DataFrame

Set WEATHERLINK_API_KEY and WEATHERLINK_API_SECRET before running.
"""

from datetime import datetime, timedelta, timezone

from weatherlink import Config, WeatherLinkError


def example_1_list_stations(client):
    """Example 1: List stations."""
    print("=" * 60)
    print("Example 1: Stations")
    print("=" * 60)

    stations = client.all_stations().stations
    for station in stations:
        print(f"  • {station.station_id}: {station.station_name} ({station.city})")

    print()
    return stations


def example_2_current_conditions(client, station_id):
    """Example 2: Current wind readings for one station."""
    print("=" * 60)
    print(f"Example 2: Current conditions for station {station_id}")
    print("=" * 60)

    current = client.current(station_id)
    for sensor in current.sensors:
        for record in sensor.data:
            updated = datetime.fromtimestamp(record["ts"], tz=timezone.utc)
            print(f"  lsid {sensor.lsid} updated {updated:%Y-%m-%d %H:%M} UTC")
            for name in ("wind_dir_last", "wind_speed_last"):
                if name in record:
                    print(f"    {name}: {record[name]}")

    print()


def example_3_historic_dataframe(client, station_id):
    """Example 3: Archive records as a DataFrame."""
    print("=" * 60)
    print(f"Example 3: Historic data for station {station_id}")
    print("=" * 60)

    end = datetime.now(timezone.utc) - timedelta(minutes=30)
    start = end - timedelta(minutes=30)

    df = client.historic(station_id, start, end).to_dataframe()
    print(f"Downloaded {len(df)} records")
    if not df.empty:
        print(df[["lsid", "date_time"]].head())

    print()


def main():
    with Config.from_env().new_client() as client:
        stations = example_1_list_stations(client)
        for station in stations:
            example_2_current_conditions(client, station.station_id)
            example_3_historic_dataframe(client, station.station_id)


if __name__ == "__main__":
    try:
        main()
    except WeatherLinkError as e:
        print(f"Error: {e}")
