import unittest

import requests

from placecast.data_sources import http, open_meteo_client
from placecast.errors import UpstreamHTTPError


class DummyResp:
    def __init__(self, payload, status_error=None):
        self._payload = payload
        self._status_error = status_error

    def raise_for_status(self):
        if self._status_error is not None:
            raise self._status_error

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class RecordingSession:
    def __init__(self, resp):
        self.resp = resp
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        if isinstance(self.resp, Exception):
            raise self.resp
        return self.resp


def _forecast_payload():
    return {
        "current": {
            "time": "2024-01-01T12:00",
            "temperature_2m": 18.4,
            "relative_humidity_2m": 61,
            "wind_speed_10m": 11.2,
        },
        "daily": {
            "time": ["2024-01-01"],
            "temperature_2m_min": [9.1],
            "temperature_2m_max": [24.6],
        },
    }


def _hourly_payload():
    return {
        "hourly": {
            "time": ["2024-01-01T00:00", "2024-01-01T01:00"],
            "temperature_2m": [12.0, None],
        }
    }


class TestOpenMeteoClient(unittest.TestCase):
    def setUp(self):
        self._orig_session = http.session

    def tearDown(self):
        http.session = self._orig_session

    def _use(self, resp):
        http.session = RecordingSession(resp)
        return http.session

    def test_search_places_with_country_code(self):
        session = self._use(DummyResp({"results": [{"id": 1, "name": "Lima"}]}))

        results = open_meteo_client.search_places("Lima", count=5, language="es", country_code="PE")

        self.assertEqual(results, [{"id": 1, "name": "Lima"}])
        params = session.calls[0]["params"]
        self.assertEqual(params["name"], "Lima")
        self.assertEqual(params["count"], 5)
        self.assertEqual(params["language"], "es")
        self.assertEqual(params["countryCode"], "PE")

    def test_search_places_without_country_code_or_results(self):
        session = self._use(DummyResp({"generationtime_ms": 0.4}))

        self.assertEqual(open_meteo_client.search_places("Nowhere"), [])
        self.assertNotIn("countryCode", session.calls[0]["params"])

    def test_fetch_forecast(self):
        session = self._use(DummyResp(_forecast_payload()))

        reading = open_meteo_client.fetch_forecast(-12.05, -77.04, timezone="America/Lima")

        self.assertEqual(reading.time, "2024-01-01T12:00")
        self.assertEqual(reading.temperature, 18.4)
        self.assertEqual(reading.humidity, 61)
        self.assertEqual(reading.wind, 11.2)
        self.assertEqual((reading.daily_min, reading.daily_max), (9.1, 24.6))
        params = session.calls[0]["params"]
        self.assertEqual(params["timezone"], "America/Lima")
        self.assertEqual(params["forecast_days"], 1)
        self.assertIn("temperature_2m", params["current"])

    def test_fetch_forecast_tolerates_missing_blocks(self):
        self._use(DummyResp({}))
        reading = open_meteo_client.fetch_forecast(0, 0)
        self.assertIsNone(reading.temperature)
        self.assertIsNone(reading.daily_min)

    def test_fetch_observations(self):
        self._use(DummyResp(_hourly_payload()))

        series = open_meteo_client.fetch_observations(0, 0)
        self.assertEqual(len(series.times), 2)
        self.assertEqual(series.temperatures, [12.0, None])

    def test_http_error_becomes_upstream_error(self):
        self._use(DummyResp({}, status_error=requests.HTTPError("500 Server Error")))
        with self.assertRaises(UpstreamHTTPError) as ctx:
            open_meteo_client.fetch_forecast(0, 0)
        self.assertEqual(ctx.exception.provider, "open_meteo_forecast")

    def test_timeout_becomes_upstream_error(self):
        self._use(requests.Timeout("read timed out"))
        with self.assertRaises(UpstreamHTTPError):
            open_meteo_client.search_places("Lima")

    def test_non_json_body_becomes_upstream_error(self):
        self._use(DummyResp(ValueError("Expecting value")))
        with self.assertRaises(UpstreamHTTPError):
            open_meteo_client.fetch_observations(0, 0)

    def test_non_object_payload_is_rejected(self):
        self._use(DummyResp(["not", "an", "object"]))
        with self.assertRaises(UpstreamHTTPError):
            open_meteo_client.fetch_forecast(0, 0)


if __name__ == "__main__":
    unittest.main()
