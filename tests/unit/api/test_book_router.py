"""Tests for the HTTP API."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from recordstore.api.http import create_app
from recordstore.runtime.config.config_data import ConfigData

HITCHHIKER = {
    "title": "The Hitchhiker's Guide to the Galaxy",
    "price": 12.5,
    "description": "Science fiction comedy book",
    "isbn": "1-84023-742-2",
    "page_count": 354,
    "has_illustrations": False,
}


@pytest.fixture
def client(config: ConfigData) -> Iterator[TestClient]:
    with TestClient(create_app(config)) as client:
        yield client


class TestBookRouter:
    def test_create_book(self, client: TestClient):
        response = client.post("/books", json=HITCHHIKER)

        assert response.status_code == 201
        body = response.json()
        assert isinstance(body["id"], int)
        assert body["title"] == HITCHHIKER["title"]
        assert body["page_count"] == 354

    def test_created_book_is_listed(self, client: TestClient):
        created = client.post("/books", json=HITCHHIKER).json()

        response = client.get("/books")

        assert response.status_code == 200
        assert response.json() == [created]

    def test_missing_title(self, client: TestClient):
        response = client.post("/books", json={**HITCHHIKER, "title": ""})

        assert response.status_code == 422
        body = response.json()
        assert body["violations"] == [{"field": "title", "message": "must not be empty"}]
        assert client.get("/books").json() == []

    def test_description_too_long(self, client: TestClient):
        response = client.post("/books", json={**HITCHHIKER, "description": "x" * 2001})

        assert response.status_code == 422
        assert response.json()["violations"][0]["field"] == "description"

    def test_client_supplied_identity(self, client: TestClient):
        response = client.post("/books", json={**HITCHHIKER, "id": 99})

        assert response.status_code == 409
        assert "already persisted" in response.json()["detail"]
        assert client.get("/books").json() == []

    def test_list_ordering(self, client: TestClient):
        for title in ("Dune", "Emma", "Beloved"):
            client.post("/books", json={"title": title})

        ascending = client.get("/books", params={"order_by": "title"}).json()
        descending = client.get(
            "/books", params={"order_by": "title", "descending": True}
        ).json()

        assert [book["title"] for book in ascending] == ["Beloved", "Dune", "Emma"]
        assert [book["title"] for book in descending] == ["Emma", "Dune", "Beloved"]

    def test_list_unknown_order_field(self, client: TestClient):
        response = client.get("/books", params={"order_by": "author"})

        assert response.status_code == 422
        assert response.json()["violations"] == [
            {"field": "author", "message": "unknown field"}
        ]

    def test_delete_books(self, client: TestClient):
        client.post("/books", json={"title": "Dune"})
        client.post("/books", json={"title": "Emma"})

        response = client.delete("/books")

        assert response.status_code == 200
        assert response.json() == {"deleted": 2}
        assert client.get("/books").json() == []


class TestHealthRouter:
    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client: TestClient):
        response = client.get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"]["database"] == {"status": "healthy", "type": "sqlite"}

    def test_not_ready(self, tmp_path):
        config = ConfigData()
        config.database.url = f"sqlite:///{tmp_path / 'missing' / 'books.db'}"
        config.database.create_tables = False

        with TestClient(create_app(config)) as client:
            response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["database"]["status"] == "unhealthy"
