"""
Pytest configuration and shared fixtures.

Response bodies are trimmed-down copies of real WeatherLink v2 payloads.
"""

import pytest

from weatherlink import Config, signing

TEST_KEY = "mykey"
TEST_SECRET = "mysecret"
FIXED_TIME = 1591894800

# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def config():
    """Configuration with the test credentials."""
    return Config(key=TEST_KEY, secret=TEST_SECRET)


@pytest.fixture
def client(config):
    """Client built from the test configuration."""
    with config.new_client() as wl:
        yield wl


@pytest.fixture
def frozen_time(monkeypatch):
    """Pin the request timestamp so signatures are predictable."""
    monkeypatch.setattr(signing.time, "time", lambda: FIXED_TIME + 0.75)
    return FIXED_TIME


@pytest.fixture
def credentials_env(monkeypatch):
    """Expose the test credentials through the environment."""
    monkeypatch.setenv("WEATHERLINK_API_KEY", TEST_KEY)
    monkeypatch.setenv("WEATHERLINK_API_SECRET", TEST_SECRET)


# ============================================================================
# Mock API Responses
# ============================================================================


@pytest.fixture
def stations_response():
    """Mock response from the /stations endpoint."""
    return {
        "stations": [
            {
                "station_id": 2970,
                "station_name": "Foo station",
                "gateway_id": 7091234,
                "gateway_id_hex": "001D0A6C3762",
                "product_number": "6100",
                "username": "foo",
                "user_email": "foo@example.com",
                "company_name": "",
                "active": True,
                "private": False,
                "recording_interval": 15,
                "firmware_version": None,
                "meid": None,
                "registered_date": 1530094044,
                "subscription_end_date": 1593166044,
                "time_zone": "Europe/London",
                "city": "London",
                "region": "England",
                "country": "United Kingdom",
                "latitude": 51.5074,
                "longitude": -0.1278,
                "elevation": 35.0,
            }
        ],
        "generated_at": 1591894812,
    }


@pytest.fixture
def sensors_response():
    """Mock response from the /sensors endpoint."""
    return {
        "sensors": [
            {
                "lsid": 234515,
                "sensor_type": 55,
                "category": "ISS",
                "manufacturer": "Davis Instruments",
                "product_name": "Vantage Vue, Wireless",
                "product_number": "6357",
                "rain_collector_type": 1,
                "active": True,
                "created_date": 1530094044,
                "modified_date": 1530094044,
                "station_id": 2970,
                "station_name": "Foo station",
                "parent_device_type": "Gateway",
                "parent_device_name": "WeatherLinkLive",
                "parent_device_id": 7091234,
                "parent_device_id_hex": "001D0A6C3762",
                "port_number": 0,
                "latitude": 51.5074,
                "longitude": -0.1278,
                "elevation": 35.0,
                "tx_id": 1,
            },
            {
                "lsid": 234516,
                "sensor_type": 242,
                "category": "Barometer",
                "manufacturer": "Davis Instruments",
                "product_name": "Barometer",
                "product_number": "6100",
                "rain_collector_type": None,
                "active": True,
                "created_date": 1530094044,
                "modified_date": 1530094044,
                "station_id": 2970,
                "station_name": "Foo station",
                "parent_device_type": "Gateway",
                "parent_device_name": "WeatherLinkLive",
                "parent_device_id": 7091234,
                "parent_device_id_hex": "001D0A6C3762",
                "port_number": 0,
                "latitude": 51.5074,
                "longitude": -0.1278,
                "elevation": 35.0,
                "tx_id": None,
            },
        ],
        "generated_at": 1591894812,
    }


@pytest.fixture
def current_response():
    """Mock response from the /current endpoint."""
    return {
        "station_id": 2970,
        "sensors": [
            {
                "lsid": 234515,
                "sensor_type": 55,
                "data_structure_type": 10,
                "data": [
                    {
                        "ts": 1591894200,
                        "temp": 62.1,
                        "hum": 71.2,
                        "wind_speed_last": 4.0,
                        "wind_dir_last": 225,
                        "rain_rate_last_mm": 0.0,
                        "uv_index": None,
                    }
                ],
            },
            {
                "lsid": 234516,
                "sensor_type": 242,
                "data_structure_type": 12,
                "data": [
                    {
                        "ts": 1591894260,
                        "bar_sea_level": 30.012,
                        "bar_trend": -0.016,
                    }
                ],
            },
        ],
        "generated_at": 1591894812,
    }


@pytest.fixture
def historic_response():
    """Mock response from the /historic endpoint."""
    return {
        "station_id": 2970,
        "sensors": [
            {
                "lsid": 234515,
                "sensor_type": 55,
                "data_structure_type": 11,
                "data": [
                    {
                        "ts": 1591891200,
                        "arch_int": 900,
                        "temp_out": 61.4,
                        "temp_out_hi": 61.9,
                        "temp_out_lo": 61.0,
                        "wind_speed_avg": 3.2,
                        "wind_dir_of_prevail": 225,
                    },
                    {
                        "ts": 1591890300,
                        "arch_int": 900,
                        "temp_out": 60.8,
                        "temp_out_hi": 61.2,
                        "temp_out_lo": 60.5,
                        "wind_speed_avg": 2.9,
                        "wind_dir_of_prevail": 202,
                    },
                ],
            }
        ],
        "generated_at": 1591894812,
    }
