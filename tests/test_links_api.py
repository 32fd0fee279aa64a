import re
from datetime import datetime, timedelta
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient
from pydantic import TypeAdapter

from tinylink_app.config import settings

_timestamp = TypeAdapter(datetime)


def parse_timestamp(value: str) -> datetime:
    return _timestamp.validate_python(value)


class TestHealth:

    def test_healthz(self, client: TestClient):
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "version": settings.app_version}


class TestLinksAPI:
    """Test the /api/links endpoints"""

    def test_create_link(self, client: TestClient, base_url):
        """Test creating a link with a generated code"""
        response = client.post("/api/links", json={"url": "https://example.com"})
        assert response.status_code == 201

        data = response.json()
        assert set(data) == {"code", "url", "clicks", "created_at", "last_clicked", "short_url"}
        assert re.fullmatch(r"[A-Za-z0-9]{6}", data["code"])
        assert data["url"] == "https://example.com"
        assert data["clicks"] == 0
        assert data["last_clicked"] is None
        assert data["short_url"] == f"{base_url}/{data['code']}"

    def test_create_link_with_custom_code(self, client: TestClient):
        response = client.post("/api/links", json={"url": "https://example.com", "code": "docs42"})

        assert response.status_code == 201
        assert response.json()["code"] == "docs42"

    def test_invalid_url(self, client: TestClient):
        """Test creating a link with an invalid URL"""
        response = client.post("/api/links", json={"url": "not-a-url"})

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.parametrize("url", [
        " https://example.com",
        "https://example.com ",
        "https://exa\tmple.com",
        "https:example.com",
        "http:\\\\example.com",
    ])
    def test_url_that_is_not_plain_absolute(self, client: TestClient, url):
        """Nothing is stored that would redirect to a relative location"""
        response = client.post("/api/links", json={"url": url})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid URL. Include protocol (http:// or https://)."}
        assert client.get("/api/links").json() == []

    def test_numeric_custom_code(self, client: TestClient):
        """code must be a JSON string; numbers are not coerced"""
        response = client.post("/api/links", json={"url": "https://example.com", "code": 12345678})

        assert response.status_code == 400
        assert "error" in response.json()
        assert client.get("/api/links").json() == []

    def test_timestamps_are_utc(self, client: TestClient):
        code = client.post("/api/links", json={"url": "https://example.com"}).json()["code"]
        client.get(f"/{code}", follow_redirects=False)

        data = client.get(f"/api/links/{code}").json()

        for field in ("created_at", "last_clicked"):
            assert parse_timestamp(data[field]).utcoffset() == timedelta(0)

    def test_missing_url(self, client: TestClient):
        response = client.post("/api/links", json={"code": "abc123"})

        assert response.status_code == 400
        assert "error" in response.json()

    def test_non_string_url(self, client: TestClient):
        response = client.post("/api/links", json={"url": 42})

        assert response.status_code == 400

    def test_invalid_custom_code(self, client: TestClient):
        response = client.post("/api/links", json={"url": "https://example.com", "code": "a-b"})

        assert response.status_code == 400
        assert response.json()["error"] == "Custom code must match [A-Za-z0-9]{6,8}."
        assert client.get("/api/links").json() == []

    def test_duplicate_custom_code(self, client: TestClient):
        client.post("/api/links", json={"url": "https://first.example", "code": "taken01"})

        response = client.post("/api/links", json={"url": "https://second.example", "code": "taken01"})

        assert response.status_code == 409
        assert response.json() == {"error": "Code already exists."}
        assert client.get("/api/links/taken01").json()["url"] == "https://first.example"

    def test_list_links_newest_first(self, client: TestClient):
        client.post("/api/links", json={"url": "https://one.example", "code": "first1"})
        client.post("/api/links", json={"url": "https://two.example", "code": "second"})

        response = client.get("/api/links")

        assert response.status_code == 200
        assert [link["code"] for link in response.json()] == ["second", "first1"]

    def test_get_link(self, client: TestClient, base_url):
        """Test getting link information"""
        create_response = client.post("/api/links", json={"url": "https://www.python.org"})
        code = create_response.json()["code"]

        response = client.get(f"/api/links/{code}")
        assert response.status_code == 200

        data = response.json()
        assert data["code"] == code
        assert data["url"] == "https://www.python.org"
        assert data["short_url"] == f"{base_url}/{code}"

    def test_get_nonexistent_link(self, client: TestClient):
        response = client.get("/api/links/nonexistent")

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    def test_delete_link(self, client: TestClient):
        """Test deleting a link"""
        code = client.post("/api/links", json={"url": "https://www.python.org"}).json()["code"]

        response = client.delete(f"/api/links/{code}")
        assert response.status_code == 200
        assert response.json() == {"ok": True}

        assert client.get(f"/api/links/{code}").status_code == 404
        assert client.get(f"/{code}", follow_redirects=False).status_code == 404

    def test_delete_nonexistent_link(self, client: TestClient):
        client.post("/api/links", json={"url": "https://example.com", "code": "keep01"})

        response = client.delete("/api/links/nonexistent")

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}
        assert len(client.get("/api/links").json()) == 1


class TestRedirect:
    """Test GET /{code}"""

    def test_redirect_counts_click(self, client: TestClient):
        code = client.post("/api/links", json={"url": "https://www.github.com/"}).json()["code"]

        response = client.get(f"/{code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://www.github.com/"

        data = client.get(f"/api/links/{code}").json()
        assert data["clicks"] == 1
        assert data["last_clicked"] is not None

    def test_each_redirect_adds_one_click(self, client: TestClient):
        code = client.post("/api/links", json={"url": "https://example.com"}).json()["code"]

        previous = None
        for expected in range(1, 4):
            client.get(f"/{code}", follow_redirects=False)
            data = client.get(f"/api/links/{code}").json()
            assert data["clicks"] == expected
            if previous is not None:
                assert parse_timestamp(data["last_clicked"]) >= parse_timestamp(previous)
            previous = data["last_clicked"]

    def test_redirect_nonexistent_code(self, client: TestClient):
        client.post("/api/links", json={"url": "https://example.com", "code": "keep01"})

        response = client.get("/nonexistent", follow_redirects=False)

        assert response.status_code == 404
        assert response.text == "Not found"
        assert client.get("/api/links/keep01").json()["clicks"] == 0

    def test_reserved_segments_are_not_codes(self, client: TestClient):
        for segment in ("api", "code"):
            response = client.get(f"/{segment}", follow_redirects=False)
            assert response.status_code == 404

        assert client.get("/healthz").json()["ok"] is True


class TestScenarios:

    def test_link_lifecycle(self, client: TestClient):
        """Create, visit, inspect, delete"""
        created = client.post("/api/links", json={"url": "https://example.com"})
        assert created.status_code == 201
        link = created.json()
        assert len(link["code"]) == 6
        assert link["clicks"] == 0
        assert link["last_clicked"] is None

        visit = client.get(f"/{link['code']}", follow_redirects=False)
        assert visit.status_code == 302
        assert visit.headers["location"] == "https://example.com"

        stats = client.get(f"/api/links/{link['code']}").json()
        assert stats["clicks"] == 1
        assert stats["last_clicked"] is not None

        assert client.delete(f"/api/links/{link['code']}").json() == {"ok": True}
        assert client.get(f"/api/links/{link['code']}").status_code == 404

    def test_concurrent_creation_of_same_code(self, concurrent_client: TestClient):
        """Two simultaneous requests for ABC123: one wins, one conflicts"""
        payload = {"url": "https://a.example", "code": "ABC123"}

        with ThreadPoolExecutor(max_workers=2) as pool:
            responses = list(pool.map(
                lambda _: concurrent_client.post("/api/links", json=payload),
                range(2)
            ))

        assert sorted(r.status_code for r in responses) == [201, 409]
        assert len(concurrent_client.get("/api/links").json()) == 1
