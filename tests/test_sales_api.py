"""
API tests for the sales endpoints.

Errors come back as {"error": message}: 400 for validation and stock
failures, 404 for missing sales or products.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def _post_sale(client, *items, **meta):
    return client.post("/sales", json={"items": list(items), **meta})


def test_record_sale(client, api_product) -> None:
    product = api_product(cost_price=200, selling_price=280, quantity=50)

    response = _post_sale(
        client,
        {"product_id": product["id"], "quantity": 5},
        customer_name="Meena",
        note="counter sale",
    )

    assert response.status_code == 201
    sale = response.json()
    assert sale["total_amount"] == 1400
    assert sale["total_profit"] == 400
    assert sale["customer_name"] == "Meena"
    assert sale["note"] == "counter sale"
    assert sale["customer_address"] is None

    item = sale["items"][0]
    assert item["product_id"] == product["id"]
    assert item["quantity"] == 5
    assert item["unit_price"] == 280
    assert item["cost_price"] == 200
    assert item["total"] == 1400
    assert item["profit"] == 400
    assert item["product"]["name"] == "Sample Paint 1L"

    assert client.get(f"/products/{product['id']}").json()["quantity"] == 45


def test_record_sale_insufficient_stock(client, api_product) -> None:
    product = api_product(name="P", quantity=3)

    response = _post_sale(client, {"product_id": product["id"], "quantity": 5})

    assert response.status_code == 400
    assert response.json() == {"error": "Insufficient stock for P. Available: 3"}
    assert client.get(f"/products/{product['id']}").json()["quantity"] == 3
    assert client.get("/sales").json() == []


def test_record_sale_unknown_product(client, api_product) -> None:
    product = api_product(quantity=10)

    response = _post_sale(
        client,
        {"product_id": product["id"], "quantity": 1},
        {"product_id": 999, "quantity": 1},
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Product not found: 999"}
    assert client.get(f"/products/{product['id']}").json()["quantity"] == 10
    assert client.get("/sales").json() == []


def test_record_sale_requires_items(client) -> None:
    response = client.post("/sales", json={"items": []})

    assert response.status_code == 400
    assert response.json() == {"error": "At least one item required"}

    response = client.post("/sales", json={})

    assert response.status_code == 400


def test_record_sale_with_price_override(client, api_product) -> None:
    product = api_product(cost_price=200, selling_price=280, quantity=10)

    response = _post_sale(client, {"product_id": product["id"], "quantity": 2, "unit_price": 150})

    assert response.status_code == 201
    assert response.json()["total_amount"] == 300
    assert response.json()["total_profit"] == -100


def test_get_sale(client, api_product) -> None:
    product = api_product()
    created = _post_sale(client, {"product_id": product["id"], "quantity": 1}).json()

    response = client.get(f"/sales/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_sale(client) -> None:
    response = client.get("/sales/77")

    assert response.status_code == 404
    assert response.json() == {"error": "Sale not found"}


def test_patch_sale_metadata(client, api_product) -> None:
    product = api_product()
    created = _post_sale(
        client,
        {"product_id": product["id"], "quantity": 2},
        customer_name="Meena",
        note="counter sale",
    ).json()

    response = client.patch(
        f"/sales/{created['id']}",
        json={"customer_address": "4 Temple Street", "note": None},
    )

    assert response.status_code == 200
    sale = response.json()
    assert sale["customer_name"] == "Meena"
    assert sale["customer_address"] == "4 Temple Street"
    assert sale["note"] is None
    assert sale["total_amount"] == created["total_amount"]
    assert sale["items"] == created["items"]


def test_patch_missing_sale(client) -> None:
    response = client.patch("/sales/5", json={"note": "x"})

    assert response.status_code == 404


def test_delete_sale_restocks(client, api_product) -> None:
    product = api_product(quantity=20)
    created = _post_sale(client, {"product_id": product["id"], "quantity": 6}).json()
    assert client.get(f"/products/{product['id']}").json()["quantity"] == 14

    response = client.delete(f"/sales/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert client.get(f"/products/{product['id']}").json()["quantity"] == 20
    assert client.get(f"/sales/{created['id']}").status_code == 404


def test_delete_missing_sale(client) -> None:
    response = client.delete("/sales/404")

    assert response.status_code == 404
    assert response.json() == {"error": "Sale not found"}


def test_list_sales_by_date_range(client, api_product) -> None:
    product = api_product()
    first = _post_sale(client, {"product_id": product["id"], "quantity": 1}).json()
    second = _post_sale(client, {"product_id": product["id"], "quantity": 1}).json()

    today = datetime.now(timezone.utc).date()
    yesterday = today - timedelta(days=1)

    response = client.get("/sales", params={"from": today.isoformat(), "to": today.isoformat()})
    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == [second["id"], first["id"]]

    response = client.get("/sales", params={"to": yesterday.isoformat()})
    assert response.json() == []


def test_list_sales_rejects_bad_date(client) -> None:
    response = client.get("/sales", params={"from": "not-a-date"})

    assert response.status_code == 400
    assert "from" in response.json()["error"]


def test_record_sale_rejects_oversized_price_override(client, api_product) -> None:
    product = api_product(quantity=10)

    response = _post_sale(
        client,
        {"product_id": product["id"], "quantity": 1, "unit_price": 100_000_000},
    )

    assert response.status_code == 400
    assert "unit_price" in response.json()["error"]
    assert client.get(f"/products/{product['id']}").json()["quantity"] == 10
