import unittest

from fastapi.testclient import TestClient

from placecast.main import app


class TestMain(unittest.TestCase):
    def test_app_metadata(self):
        self.assertEqual(app.title, "placecast")

    def test_health(self):
        resp = TestClient(app).get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok"})


if __name__ == "__main__":
    unittest.main()
