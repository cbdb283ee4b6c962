import unittest

from placecast.address_service import AddressLookupService
from placecast.data_sources import CallableDataSource
from placecast.errors import InvalidInputError, UpstreamStatusError
from placecast.geocode_cache import InMemoryGeocodeCache
from placecast.geocoding import GeocodingResolver


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def _unused(*_args, **_kwargs):
    raise AssertionError("unexpected call")


class CountingGeocoder:
    def __init__(self, payload):
        self.payload = payload
        self.calls = []

    def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return self.payload


_OK_PAYLOAD = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "Plaza de Armas, Santiago, Chile",
            "place_id": "plaza",
            "types": ["route"],
            "geometry": {"location": {"lat": -33.4378, "lng": -70.6504}},
        }
    ],
}


def _service(geocoder, clock=None, ttl=600):
    source = CallableDataSource(
        place_search=_unused,
        address_geocoder=geocoder,
        forecast=_unused,
        observations=_unused,
    )
    resolver = GeocodingResolver(source, language="es")
    cache = InMemoryGeocodeCache(ttl_seconds=ttl, clock=clock or FakeClock())
    return AddressLookupService(resolver, cache, default_language="es")


class TestAddressLookupService(unittest.IsolatedAsyncioTestCase):
    async def test_reverse_is_cached_until_ttl_elapses(self):
        clock = FakeClock()
        geocoder = CountingGeocoder(_OK_PAYLOAD)
        service = _service(geocoder, clock)

        first = await service.reverse(-33.4489, -70.6693, "es")
        second = await service.reverse(-33.4489, -70.6693, "es")
        self.assertEqual(first, second)
        self.assertEqual(len(geocoder.calls), 1)
        self.assertEqual(geocoder.calls[0]["latlng"], (-33.4489, -70.6693))

        clock.now += 601
        await service.reverse(-33.4489, -70.6693, "es")
        self.assertEqual(len(geocoder.calls), 2)

    async def test_language_is_part_of_the_key(self):
        geocoder = CountingGeocoder(_OK_PAYLOAD)
        service = _service(geocoder)
        await service.reverse(-33.4489, -70.6693, "es")
        await service.reverse(-33.4489, -70.6693, "en")
        self.assertEqual([c["language"] for c in geocoder.calls], ["es", "en"])

    async def test_forward_is_cached_on_normalized_address(self):
        geocoder = CountingGeocoder(_OK_PAYLOAD)
        service = _service(geocoder)
        await service.forward("Plaza de Armas, Santiago")
        result = await service.forward("  plaza de armas,   SANTIAGO ")
        self.assertEqual(len(geocoder.calls), 1)
        self.assertEqual(result.place_id, "plaza")

    async def test_forward_rejects_blank(self):
        service = _service(CountingGeocoder(_OK_PAYLOAD))
        with self.assertRaises(InvalidInputError):
            await service.forward("   ")

    async def test_reverse_rejects_out_of_range(self):
        service = _service(CountingGeocoder(_OK_PAYLOAD))
        with self.assertRaises(InvalidInputError):
            await service.reverse(123.0, 0.0)

    async def test_status_errors_propagate_and_are_not_cached(self):
        geocoder = CountingGeocoder({"status": "OVER_QUERY_LIMIT", "results": []})
        service = _service(geocoder)
        for _ in range(2):
            with self.assertRaises(UpstreamStatusError):
                await service.reverse(1.0, 2.0)
        self.assertEqual(len(geocoder.calls), 2)

    async def test_nearby_is_not_cached(self):
        geocoder = CountingGeocoder(_OK_PAYLOAD)
        service = _service(geocoder)
        await service.nearby(-33.4489, -70.6693)
        await service.nearby(-33.4489, -70.6693)
        self.assertEqual(len(geocoder.calls), 2)


if __name__ == "__main__":
    unittest.main()
