"""Tests for the FastAPI API."""

import json

import pytest
from fastapi.testclient import TestClient

from ordertrack.api import app, set_store
from ordertrack.storage import OrderBookStore


@pytest.fixture
def api_client(order_book):
    """Create test client serving the seeded order book."""
    set_store(order_book)
    yield TestClient(app)
    set_store(None)


class TestHealthCheck:
    def test_health_initialized(self, api_client):
        response = api_client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["initialized"] is True
        assert data["order_count"] == 2

    def test_health_not_initialized(self, temp_dir):
        set_store(OrderBookStore(temp_dir / "missing.json"))
        try:
            response = TestClient(app).get("/api/health")
        finally:
            set_store(None)
        assert response.status_code == 200
        assert response.json()["initialized"] is False

    def test_health_reports_invalid_book(self, api_client, order_book):
        order_book.path.write_text(json.dumps({"customerOrders": [{"status": "FOO"}]}))

        response = api_client.get("/api/health")
        assert response.json()["status"] == "error"


class TestListOrders:
    def test_list_all(self, api_client):
        response = api_client.get("/api/orders")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        first, second = data["orders"]
        assert first["index"] == 1
        assert first["order_type"] == "Customer Order"
        assert first["order_date"] == "01-01-2024 10:00"
        assert second["order_type"] == "Supply Order"
        assert second["items"][0]["unit"] == "kg"

    def test_filter_by_type(self, api_client):
        response = api_client.get("/api/orders?type=supply")
        data = response.json()
        assert data["count"] == 1
        assert data["orders"][0]["index"] == 2

    def test_not_initialized(self, temp_dir):
        set_store(OrderBookStore(temp_dir / "missing.json"))
        try:
            response = TestClient(app).get("/api/orders")
        finally:
            set_store(None)
        assert response.status_code == 409
        assert response.json()["error_type"] == "DataFileNotFoundError"


class TestGetOrder:
    def test_get(self, api_client):
        response = api_client.get("/api/orders/1")
        assert response.status_code == 200
        assert response.json()["person"]["name"] == "Alice Tan"

    def test_not_found(self, api_client):
        response = api_client.get("/api/orders/9")
        assert response.status_code == 404
        assert response.json()["error_type"] == "OrderNotFoundError"


class TestCreateCustomerOrder:
    def test_create(self, api_client, order_book):
        response = api_client.post("/api/orders/customer", json={"command": "87654321 1 2"})
        assert response.status_code == 201
        data = response.json()
        assert data["index"] == 2
        assert data["status"] == "PENDING"
        assert [item["id"] for item in data["items"]] == [1, 2]

        # Persisted at the same index
        assert api_client.get("/api/orders/2").json()["person"]["phone"] == "87654321"
        assert len(order_book.load().orders) == 3

    def test_parse_error(self, api_client):
        response = api_client.post("/api/orders/customer", json={"command": "87654321"})
        assert response.status_code == 400
        data = response.json()
        assert data["error_type"] == "ParseError"
        assert "Invalid command format!" in data["detail"]

    def test_bad_id(self, api_client):
        response = api_client.post("/api/orders/customer", json={"command": "87654321 5 abc 7"})
        assert response.status_code == 400
        assert response.json()["detail"] == "ID must be a valid integer."

    def test_unknown_product(self, api_client, order_book):
        response = api_client.post("/api/orders/customer", json={"command": "87654321 42"})
        assert response.status_code == 404
        assert response.json()["error_type"] == "ProductNotFoundError"
        assert len(order_book.load().orders) == 2


class TestUpdateOrder:
    def test_update_status_and_remark(self, api_client):
        response = api_client.patch(
            "/api/orders/2", json={"status": "completed", "remark": "Received"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "COMPLETED"
        assert data["remark"] == "Received"

    def test_invalid_status(self, api_client):
        response = api_client.patch("/api/orders/1", json={"status": "shipped"})
        assert response.status_code == 400
        data = response.json()
        assert data["error_type"] == "InvalidStatusError"
        assert "PENDING, IN_PROGRESS, COMPLETED, CANCELLED" in data["detail"]

    def test_null_remark_rejected(self, api_client, order_book):
        response = api_client.patch("/api/orders/1", json={"remark": None})
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid remark: ")
        assert str(order_book.load().get_order(1).remark) == "Deliver before noon"

    def test_empty_remark_clears(self, api_client):
        response = api_client.patch("/api/orders/1", json={"remark": ""})
        assert response.status_code == 200
        assert response.json()["remark"] == ""


class TestDeleteOrder:
    def test_delete(self, api_client):
        response = api_client.delete("/api/orders/1")
        assert response.status_code == 200
        assert response.json()["order_type"] == "Customer Order"

        remaining = api_client.get("/api/orders").json()
        assert remaining["count"] == 1
        assert remaining["orders"][0]["order_type"] == "Supply Order"
