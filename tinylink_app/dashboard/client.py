"""
HTTP client for the links API, used by the dashboard.
"""

import time
from typing import Dict, List, Optional

import httpx


class DashboardApiError(Exception):
    """Non-2xx answer from the links API"""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class LinkApiClient:
    """
    Thin wrapper over /api/links.

    Takes any httpx.Client with base_url pointing at the service, which
    includes FastAPI's TestClient.
    """

    def __init__(self, http: httpx.Client):
        self.http = http

    @classmethod
    def from_url(cls, base_url: str, timeout: float = 5.0) -> "LinkApiClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def list_links(self) -> List[Dict]:
        # t busts intermediary caches, like the browser dashboard does
        response = self.http.get("/api/links", params={"t": int(time.time() * 1000)})
        return self._json(response)

    def create_link(self, url: str, code: Optional[str] = None) -> Dict:
        payload = {"url": url}
        if code:
            payload["code"] = code
        return self._json(self.http.post("/api/links", json=payload))

    def delete_link(self, code: str) -> Dict:
        return self._json(self.http.delete(f"/api/links/{code}"))

    def close(self) -> None:
        self.http.close()

    @staticmethod
    def _json(response: httpx.Response):
        if response.is_success:
            return response.json()
        try:
            message = response.json().get("error") or response.reason_phrase
        except ValueError:
            message = response.text or response.reason_phrase
        raise DashboardApiError(response.status_code, message)
