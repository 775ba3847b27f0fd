"""
Integration tests for the API over the in-memory stores.

Exercises full request flows through routing, guards, services and the
storage adapter without a database.
"""

from fastapi.testclient import TestClient

from restdemo.api.main import create_app
from restdemo.config.settings import Settings

CLIENT_HEADERS = {"X-Client-Id": "client-1", "X-Request-Id": "req-1"}
AUTH_HEADERS = {"X-Auth-Token": "token-1"}


def create_todos(client: TestClient, count: int) -> list[int]:
    ids = []
    for i in range(count):
        response = client.post("/api/todos", json={"title": f"Todo {i}"}, headers=CLIENT_HEADERS)
        assert response.status_code == 201
        ids.append(response.json()["id"])
    return ids


class TestHealth:
    """Tests for health endpoints."""

    def test_app_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_todo_health(self, client: TestClient) -> None:
        response = client.get("/api/todos/health")
        assert response.status_code == 200
        assert response.text == "Todo API is up and running!"


class TestRequestId:
    """Tests for X-Request-ID correlation."""

    def test_valid_inbound_id_is_echoed(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_invalid_inbound_id_is_replaced(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "not valid!"})
        generated = response.headers["X-Request-ID"]
        assert generated != "not valid!"
        assert len(generated) == 32

    def test_error_responses_carry_request_id(self, client: TestClient) -> None:
        response = client.get("/api/todos/all")
        assert response.status_code == 400
        assert "X-Request-ID" in response.headers


class TestTodoFlow:
    """End-to-end to-do flows."""

    def test_empty_store_returns_default_item(self, client: TestClient) -> None:
        response = client.get("/api/todos/all", headers=CLIENT_HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["items"][0]["title"] == "Default To-Do"

    def test_create_then_fetch(self, client: TestClient) -> None:
        response = client.post(
            "/api/todos/create",
            json={"title": "Buy milk", "description": "2 litres", "dueDate": "2999-01-01", "tags": ["home"]},
            headers=CLIENT_HEADERS,
        )
        assert response.status_code == 201
        created = response.json()
        assert created["dueDate"] == "2999-01-01"

        location = response.headers["Location"]
        fetched = client.get(location, headers=CLIENT_HEADERS)

        assert fetched.status_code == 200
        assert fetched.json() == created

    def test_unknown_and_non_numeric_ids_are_not_found(self, client: TestClient) -> None:
        for todo_id in ("999", "abc"):
            response = client.get(f"/api/todos/{todo_id}", headers=CLIENT_HEADERS)
            assert response.status_code == 404
            assert response.json()["message"] == f"To-Do item not found with ID: {todo_id}"

    def test_strict_listing_pages(self, client: TestClient) -> None:
        create_todos(client, 5)

        first = client.get("/api/todos?page=0&size=2", headers=CLIENT_HEADERS).json()
        last = client.get("/api/todos?page=2&size=2", headers=CLIENT_HEADERS).json()
        past = client.get("/api/todos?page=3&size=2", headers=CLIENT_HEADERS).json()

        assert [t["title"] for t in first["content"]] == ["Todo 0", "Todo 1"]
        assert (first["totalPages"], first["first"], first["last"]) == (3, True, False)
        assert (last["numberOfElements"], last["last"]) == (1, True)
        assert past["empty"] is True
        assert past["totalElements"] == 5
        assert past["totalPages"] == 3

    def test_lenient_listing_falls_back_and_sorts(self, client: TestClient) -> None:
        create_todos(client, 3)

        response = client.get(
            "/api/todos/paginated?page=-4&size=abc&sort=title,desc", headers=CLIENT_HEADERS
        )

        assert response.status_code == 200
        body = response.json()
        assert body["number"] == 0
        assert body["size"] == 10
        assert [t["title"] for t in body["content"]] == ["Todo 2", "Todo 1", "Todo 0"]
        assert response.headers["X-Total-Count"] == "3"

    def test_lenient_listing_caps_size(self) -> None:
        client = TestClient(create_app(Settings(database_url=None, max_page_size=2, _env_file=None)))
        create_todos(client, 3)

        body = client.get("/api/todos/paginated?size=50", headers=CLIENT_HEADERS).json()

        assert body["size"] == 2
        assert body["totalPages"] == 2

    def test_listings_are_stable_across_calls(self, client: TestClient) -> None:
        create_todos(client, 4)
        url = "/api/todos/paginatedV2?page=1&size=2"

        first = client.get(url, headers=CLIENT_HEADERS).json()
        second = client.get(url, headers=CLIENT_HEADERS).json()

        assert first == second


class TestValidationDetail:
    """Tests for the VALIDATION_ERROR_DETAIL setting."""

    def test_plain_messages(self) -> None:
        settings = Settings(database_url=None, validation_error_detail="plain", _env_file=None)
        client = TestClient(create_app(settings))

        response = client.post("/api/todos", json={"dueDate": "2000-01-01"}, headers=CLIENT_HEADERS)

        assert response.json()["errors"] == ["Title is mandatory", "Due date must not be in the past"]


class TestResourceFlow:
    """End-to-end resource flows."""

    def test_empty_store_returns_default_resource(self, client: TestClient) -> None:
        response = client.get("/api/resources", headers=AUTH_HEADERS)
        assert response.json() == [{"id": "default-id", "name": "default-name"}]

    def test_crud(self, client: TestClient) -> None:
        created = client.post("/api/resources", json={"id": "r1", "name": "Alpha"}, headers=AUTH_HEADERS)
        assert created.status_code == 201
        assert created.headers["Location"] == "/api/resources/r1"

        assert client.get("/api/resources/r1", headers=AUTH_HEADERS).json() == {"id": "r1", "name": "Alpha"}

        filtered = client.get("/api/resources?name=ALPHA", headers=AUTH_HEADERS).json()
        assert filtered == [{"id": "r1", "name": "Alpha"}]

        updated = client.put("/api/resources/r1", json={"name": "Beta"}, headers=AUTH_HEADERS)
        assert updated.json() == {"id": "r1", "name": "Beta"}

        deleted = client.delete("/api/resources/r1", headers=AUTH_HEADERS)
        assert deleted.status_code == 204

        missing = client.get("/api/resources/r1", headers=AUTH_HEADERS)
        assert missing.status_code == 404

    def test_put_creates_missing_resource(self, client: TestClient) -> None:
        response = client.put("/api/resources/new", json={"name": "Fresh"}, headers=AUTH_HEADERS)
        assert response.status_code == 200
        assert client.get("/api/resources/new", headers=AUTH_HEADERS).json()["name"] == "Fresh"

    def test_put_requires_name(self, client: TestClient) -> None:
        response = client.put("/api/resources/r1", json={}, headers=AUTH_HEADERS)
        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed for: ResourceUpdateRequest"


class TestStartupSeeding:
    """Tests for demo data seeding during the lifespan."""

    def test_seeds_configured_count(self) -> None:
        settings = Settings(database_url=None, seed_demo_data=True, initial_todo_count=3, _env_file=None)

        with TestClient(create_app(settings)) as client:
            body = client.get("/api/todos/all", headers=CLIENT_HEADERS).json()

        assert body["count"] == 3
        assert body["items"][0]["title"] == "Buy groceries"

    def test_no_seeding_by_default(self, client: TestClient) -> None:
        with client:
            body = client.get("/api/todos/all", headers=CLIENT_HEADERS).json()
        assert body["items"][0]["title"] == "Default To-Do"
