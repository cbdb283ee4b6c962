import os
import unittest

from placecast.config import Settings


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        previous = os.environ.pop("PLACECAST_LANGUAGE", None)
        try:
            s = Settings()
            self.assertEqual(s.language, "es")
            self.assertEqual(s.candidate_limit, 10)
            self.assertEqual(s.geocode_cache_ttl_seconds, 600)
            self.assertEqual(s.data_source, "open_meteo")
        finally:
            if previous is not None:
                os.environ["PLACECAST_LANGUAGE"] = previous

    def test_settings_env_override(self):
        previous = os.environ.get("PLACECAST_GOOGLE_MAPS_API_KEY")
        try:
            os.environ["PLACECAST_GOOGLE_MAPS_API_KEY"] = "abc"
            s = Settings()
            self.assertEqual(s.google_maps_api_key, "abc")
        finally:
            if previous is None:
                os.environ.pop("PLACECAST_GOOGLE_MAPS_API_KEY", None)
            else:
                os.environ["PLACECAST_GOOGLE_MAPS_API_KEY"] = previous

    def test_cache_ttl_override(self):
        previous = os.environ.get("PLACECAST_GEOCODE_CACHE_TTL_SECONDS")
        try:
            os.environ["PLACECAST_GEOCODE_CACHE_TTL_SECONDS"] = "30"
            s = Settings()
            self.assertEqual(s.geocode_cache_ttl_seconds, 30)
        finally:
            if previous is None:
                os.environ.pop("PLACECAST_GEOCODE_CACHE_TTL_SECONDS", None)
            else:
                os.environ["PLACECAST_GEOCODE_CACHE_TTL_SECONDS"] = previous

    def test_candidate_limit_is_clamped(self):
        self.assertEqual(Settings(candidate_limit=0).candidate_limit, 1)
        self.assertEqual(Settings(candidate_limit=500).candidate_limit, 100)

    def test_urls_lose_trailing_slash(self):
        s = Settings(forecast_url="https://example.com/v1/forecast/")
        self.assertEqual(s.forecast_url, "https://example.com/v1/forecast")


if __name__ == "__main__":
    unittest.main()
