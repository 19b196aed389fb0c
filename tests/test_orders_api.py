"""Tests for the order service endpoints, wired to in-memory fakes."""
import pytest
from fastapi.testclient import TestClient

from perfulandia.orders.deps import get_orchestrator, get_order_store
from perfulandia.orders.main import app


@pytest.fixture
def client(orchestrator, orders):
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_order_store] = lambda: orders
    yield TestClient(app)
    app.dependency_overrides.clear()


def _place(client, **overrides):
    body = {"customerRef": "1", "productRef": "1", "quantity": 3, "total": 30.0, "date": "2025-06-01"}
    body.update(overrides)
    return client.post("/orders", json=body)


def test_place_order(client, publisher, payments):
    r = _place(client)

    assert r.status_code == 200
    assert r.json() == {
        "id": 1,
        "customerRef": "1",
        "productRef": "1",
        "quantity": 3,
        "total": 30.0,
        "date": "2025-06-01",
    }
    assert publisher.messages == [b"1:-3"]
    assert len(payments.calls) == 1


def test_place_order_accepts_snake_case_and_int_refs(client):
    r = client.post("/orders", json={"customer_ref": 1, "product_ref": 1, "quantity": 1, "total": 10})

    assert r.status_code == 200
    assert r.json()["customerRef"] == "1"
    assert r.json()["date"] is not None


def test_unknown_customer_is_400(client, orders):
    r = _place(client, customerRef="99")

    assert r.status_code == 400
    assert "does not exist" in r.json()["detail"]
    assert orders.orders == {}


def test_malformed_customer_ref_is_400(client):
    r = _place(client, customerRef="ana")
    assert r.status_code == 400


def test_unknown_product_is_404(client):
    r = _place(client, productRef="42")

    assert r.status_code == 404
    assert r.json()["detail"] == "Product 42 not found in inventory"


def test_insufficient_stock_is_409_with_available(client, stock, orders):
    stock.add(2, 2)

    r = _place(client, productRef="2", quantity=5)

    assert r.status_code == 409
    assert r.json()["detail"] == {"message": "Insufficient stock. Available: 2", "available": 2}
    assert orders.orders == {}


def test_store_failure_is_500(client, orders, publisher):
    orders.error = RuntimeError("db down")

    r = _place(client)

    assert r.status_code == 500
    assert publisher.messages == []


@pytest.mark.parametrize("field,value", [("quantity", 0), ("quantity", -2), ("total", -1)])
def test_invalid_amounts_are_422(client, validator, field, value):
    r = _place(client, **{field: value})

    assert r.status_code == 422
    assert validator.user_calls == []


def test_verify_stock(client, stock):
    stock.add(2, 2)

    r = client.get("/orders/verify-stock/1/4")
    assert r.status_code == 200
    assert r.text == "Sufficient stock: 10"

    r = client.get("/orders/verify-stock/2/3")
    assert r.status_code == 409
    assert r.text == "Insufficient stock. Available: 2"

    r = client.get("/orders/verify-stock/9/1")
    assert r.status_code == 404
    assert r.text == "Product not found in inventory"


def test_verify_stock_has_no_side_effects(client, orders, publisher):
    client.get("/orders/verify-stock/1/4")
    assert orders.orders == {}
    assert publisher.messages == []


def test_stock_level(client):
    r = client.get("/orders/stock/1")
    assert r.status_code == 200
    assert r.json() == {"productId": "1", "quantityAvailable": 10}

    assert client.get("/orders/stock/9").status_code == 404


def test_get_and_list_orders(client):
    _place(client)

    assert client.get("/orders/1").json()["quantity"] == 3
    assert client.get("/orders/2").status_code == 404
    assert [o["id"] for o in client.get("/orders").json()] == [1]


def test_update_order(client):
    _place(client)

    r = client.put("/orders/1", json={"customerRef": "2", "productRef": "1", "quantity": 1, "total": 10.0})

    assert r.status_code == 200
    assert r.json()["customerRef"] == "2"
    assert r.json()["date"] == "2025-06-01"
    assert client.put("/orders/5", json={"customerRef": "2", "productRef": "1", "quantity": 1, "total": 1}).status_code == 404


def test_patch_order_only_touches_given_fields(client):
    _place(client)

    r = client.patch("/orders/1", json={"quantity": 2, "total": 20.0})

    assert r.status_code == 200
    body = r.json()
    assert body["quantity"] == 2
    assert body["total"] == 20.0
    assert body["customerRef"] == "1"


def test_patch_order_rejects_unknown_fields(client):
    _place(client)

    r = client.patch("/orders/1", json={"id": 7})

    assert r.status_code == 422
    assert client.get("/orders/1").json()["id"] == 1


def test_patch_order_rejects_null(client):
    _place(client)
    assert client.patch("/orders/1", json={"quantity": None}).status_code == 422


def test_patch_missing_order_is_404(client):
    assert client.patch("/orders/3", json={"quantity": 2}).status_code == 404


def test_delete_order(client, orders):
    _place(client)

    r = client.delete("/orders/1")

    assert r.status_code == 204
    assert orders.orders == {}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "service": "order-service"}
