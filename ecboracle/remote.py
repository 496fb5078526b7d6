"""Oracle adapter for the HTTP service in ecboracle.server."""

import base64

import requests

BASE_URL = "http://localhost:1337"
TIMEOUT = 10


class RemoteOracle:
    """Calls POST {base_url}/api/encrypt for every query"""

    def __init__(self, base_url: str = BASE_URL, session=None, timeout: float = TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def __call__(self, data: bytes) -> bytes:
        response = self.session.post(
            f"{self.base_url}/api/encrypt",
            json={"data": base64.b64encode(data).decode()},
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return base64.b64decode(response.json()["ciphertext"])
