import unittest

from placecast.models import AddressResult, WeatherSample


class TestModels(unittest.TestCase):
    def test_weather_sample_emptiness(self):
        self.assertTrue(WeatherSample().is_empty())
        self.assertFalse(WeatherSample(humidity=0).is_empty())
        self.assertFalse(WeatherSample(current=0.0).is_empty())

    def test_address_result_found(self):
        hit = AddressResult("OK", "Calle 1", "pid", 1.0, 2.0, types=("street_address",))
        miss = AddressResult("ZERO_RESULTS", None, None, None, None)
        self.assertTrue(hit.found)
        self.assertFalse(miss.found)
        self.assertEqual(miss.types, ())


if __name__ == "__main__":
    unittest.main()
