# Overview: HTTP contract of the order and inventory routes.

"""
Order API Contract

POST /api/orders answers {"orderId": id} (201) on success and {"error": ...}
on failure. Clients branch on the presence of "orderId", so an error body
must never carry one.
"""

import pytest


@pytest.fixture
def order_body(agent, shop, sales_rep, product):
    return {
        "agentId": agent.id,
        "shopId": shop.id,
        "salesRepId": sales_rep.id,
        "paymentMethod": "Credit Card",
        "paymentAmount": 152.50,
        "productIds": [product.id],
        "quantities": [10],
        "prices": [15.25],
    }


def _agent_quantity(client, agent_id, product_id):
    rows = client.get(f"/api/inventory/agent/{agent_id}").get_json()
    return next(row["quantity"] for row in rows if row["product_id"] == product_id)


class TestCreateOrderRoute:

    def test_success_returns_order_id(self, client, stocked, order_body):
        response = client.post("/api/orders", json=order_body)

        assert response.status_code == 201
        body = response.get_json()
        assert set(body) == {"orderId"}
        assert _agent_quantity(client, stocked["agent_id"], stocked["product_id"]) == 75

    def test_insufficient_inventory_returns_error(self, client, stocked, order_body):
        order_body["quantities"] = [90]

        response = client.post("/api/orders", json=order_body)

        assert response.status_code == 409
        body = response.get_json()
        assert "orderId" not in body
        assert body["error"] == (
            f"Insufficient inventory for product ID {stocked['product_id']}. Available: 85, Requested: 90"
        )
        assert body["details"]["available"] == 85
        assert _agent_quantity(client, stocked["agent_id"], stocked["product_id"]) == 85

    def test_missing_fields(self, client, db_session):
        response = client.post("/api/orders", json={"agentId": 1})

        assert response.status_code == 400
        body = response.get_json()
        assert body["error"] == "Missing required fields"
        assert "paymentMethod" in body["details"]["missing"]

    def test_array_length_mismatch(self, client, stocked, order_body):
        order_body["prices"] = [15.25, 1.00]

        response = client.post("/api/orders", json=order_body)

        assert response.status_code == 400
        assert response.get_json()["error"] == (
            "Product IDs, quantities, and prices arrays must have the same length"
        )

    def test_unknown_shop(self, client, stocked, order_body):
        order_body["shopId"] = 99999
        response = client.post("/api/orders", json=order_body)
        assert response.status_code == 404
        assert "orderId" not in response.get_json()


class TestOrderReadRoutes:

    def test_summary_items_and_status(self, client, stocked, order_body):
        order_id = client.post("/api/orders", json=order_body).get_json()["orderId"]

        summary = client.get("/api/orders/summary").get_json()
        assert [row["order_id"] for row in summary] == [order_id]
        assert summary[0]["TotalOrderValue"] == 152.5

        items = client.get(f"/api/orders/{order_id}/items").get_json()
        assert items[0]["product_name"] == "Olive Oil"

        response = client.patch(f"/api/orders/{order_id}/status", json={"status": "Shipped"})
        assert response.status_code == 200
        assert response.get_json()["status"] == "Shipped"

        by_agent = client.get(f"/api/orders/agent/{order_body['agentId']}").get_json()
        assert by_agent[0]["status"] == "Shipped"
        by_rep = client.get(f"/api/orders/sales-rep/{order_body['salesRepId']}").get_json()
        assert [row["order_id"] for row in by_rep] == [order_id]

    def test_invalid_status(self, client, stocked, order_body):
        order_id = client.post("/api/orders", json=order_body).get_json()["orderId"]
        response = client.patch(f"/api/orders/{order_id}/status", json={"status": "Lost"})
        assert response.status_code == 400

    def test_items_for_unknown_order(self, client, db_session):
        assert client.get("/api/orders/99999/items").status_code == 404


class TestInventoryRoutes:

    def test_restock_is_additive(self, client, agent, product):
        body = {"agent_id": agent.id, "product_id": product.id, "quantity": 10}

        client.post("/api/inventory/restock", json=body)
        response = client.post("/api/inventory/restock", json=body)

        assert response.status_code == 200
        payload = response.get_json()
        assert payload["message"] == "Inventory restocked successfully"
        assert payload["inventory"]["quantity"] == 20

    def test_restock_requires_ids(self, client, db_session):
        response = client.post("/api/inventory/restock", json={"quantity": 5})
        assert response.status_code == 400
        assert response.get_json()["error"] == "Agent ID and Product ID are required"

    def test_restock_zero_quantity(self, client, agent, product):
        response = client.post(
            "/api/inventory/restock",
            json={"agent_id": agent.id, "product_id": product.id, "quantity": 0},
        )
        assert response.status_code == 400
        assert client.get("/api/inventory").get_json() == []

    def test_low_inventory(self, client, stocked):
        assert client.get("/api/inventory/low/10").get_json() == []

        rows = client.get("/api/inventory/low/85").get_json()
        assert [row["quantity"] for row in rows] == [85]
        assert rows[0]["ProductName"] == "Olive Oil"

    def test_low_inventory_bad_threshold(self, client, db_session):
        assert client.get("/api/inventory/low/abc").status_code == 400
