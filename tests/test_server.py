import base64
import threading
import unittest
from urllib.parse import urlsplit

import requests

from ecboracle.attack import recover_secret, recover_secret_with_prefix
from ecboracle.oracle import EncryptionOracle, new_ecb_suffix_oracle
from ecboracle.remote import RemoteOracle
from ecboracle.server import create_app


class FlaskResponse:
    """The bits of requests.Response that RemoteOracle uses."""

    def __init__(self, response):
        self.status_code = response.status_code
        self._json = response.get_json(silent=True)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._json


class FlaskSession:
    """Routes RemoteOracle's requests to a flask test client."""

    def __init__(self, app):
        self.client = app.test_client()
        self.calls = 0

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls += 1
        return FlaskResponse(self.client.post(urlsplit(url).path, json=json))


class TestServer(unittest.TestCase):

    def setUp(self):
        self.oracle = new_ecb_suffix_oracle(b"server side secret")
        self.client = create_app(self.oracle).test_client()

    def test_encrypt(self):
        data = b"attacker data"
        r = self.client.post("/api/encrypt", json={"data": base64.b64encode(data).decode()})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(base64.b64decode(r.get_json()["ciphertext"]), self.oracle(data))

    def test_missing_field(self):
        r = self.client.post("/api/encrypt", json={"plaintext": "AAAA"})
        self.assertEqual(r.status_code, 400)
        self.assertIn("error", r.get_json())

    def test_not_json(self):
        r = self.client.post("/api/encrypt", data="data=AAAA")
        self.assertEqual(r.status_code, 400)

    def test_bad_base64(self):
        r = self.client.post("/api/encrypt", json={"data": "not base64!"})
        self.assertEqual(r.status_code, 400)

    def test_status_counts_queries(self):
        for _ in range(3):
            self.client.post("/api/encrypt", json={"data": ""})
        body = self.client.get("/status").get_json()
        self.assertEqual(body["status"], "running")
        self.assertEqual(body["queries"], 3)

    def test_status_counts_concurrent_queries(self):
        app = create_app(self.oracle)

        def worker():
            client = app.test_client()
            for _ in range(25):
                client.post("/api/encrypt", json={"data": "QUFBQQ=="})

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(app.test_client().get("/status").get_json()["queries"], 200)


class TestRemoteOracle(unittest.TestCase):

    def test_same_as_local(self):
        oracle = new_ecb_suffix_oracle(b"remote secret")
        remote = RemoteOracle("http://oracle.test/", session=FlaskSession(create_app(oracle)))
        for data in (b"", b"A", b"\x00" * 40):
            self.assertEqual(remote(data), oracle(data))

    def test_recover_over_http(self):
        secret = b"sent over the wire"
        session = FlaskSession(create_app(new_ecb_suffix_oracle(secret)))
        self.assertEqual(recover_secret(RemoteOracle("http://oracle.test", session=session)), secret)
        self.assertGreater(session.calls, len(secret))

    def test_recover_with_prefix_over_http(self):
        secret = b"prefixed secret"
        oracle = EncryptionOracle(secret, prefix=b"fixed 11 b.")
        remote = RemoteOracle("http://oracle.test", session=FlaskSession(create_app(oracle)))
        self.assertEqual(recover_secret_with_prefix(remote), secret)

    def test_http_error(self):
        app = create_app(new_ecb_suffix_oracle(b""))

        class Unavailable(FlaskSession):
            def post(self, url, json=None, headers=None, timeout=None):
                return FlaskResponse(self.client.get("/no/such/route"))

        with self.assertRaises(requests.HTTPError):
            RemoteOracle(session=Unavailable(app))(b"A")


if __name__ == "__main__":
    unittest.main()
