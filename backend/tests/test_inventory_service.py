# Overview: Pytest coverage for the agent inventory ledger.

from datetime import datetime
from decimal import Decimal

import pytest

from sales_system.errors import InvalidArgument, NotFound
from sales_system.models import Agent, InventoryRecord, Product
from sales_system.services import inventory_service, order_service


class TestRestock:
    """Restock is additive and creates records lazily."""

    def test_first_restock_creates_record(self, db_session, agent, product):
        row = inventory_service.restock(agent.id, product.id, 10)

        assert row["quantity"] == 10
        assert row["agent_name"] == "Agent One"
        assert row["product_name"] == "Olive Oil"
        assert row["supplier_name"] == "Acme Foods"

    def test_restock_is_additive(self, db_session, agent, product):
        inventory_service.restock(agent.id, product.id, 10)
        row = inventory_service.restock(agent.id, product.id, 10)

        assert row["quantity"] == 20
        assert inventory_service.get_quantity(agent.id, product.id) == 20

    def test_restock_adds_to_existing_stock(self, db_session, stocked):
        row = inventory_service.restock(stocked["agent_id"], stocked["product_id"], 15)
        assert row["quantity"] == 100

    def test_zero_quantity_rejected_without_creating_record(self, db_session, agent, product):
        with pytest.raises(InvalidArgument):
            inventory_service.restock(agent.id, product.id, 0)

        assert db_session.query(InventoryRecord).count() == 0

    def test_zero_quantity_leaves_existing_record_unchanged(self, db_session, stocked):
        with pytest.raises(InvalidArgument):
            inventory_service.restock(stocked["agent_id"], stocked["product_id"], 0)

        assert inventory_service.get_quantity(stocked["agent_id"], stocked["product_id"]) == 85

    @pytest.mark.parametrize("quantity", [-5, "abc", 2.5, None, True])
    def test_invalid_quantities_rejected(self, db_session, agent, product, quantity):
        with pytest.raises(InvalidArgument):
            inventory_service.restock(agent.id, product.id, quantity)

    def test_unknown_agent(self, db_session, product):
        with pytest.raises(NotFound):
            inventory_service.restock(99999, product.id, 5)

    def test_unknown_product(self, db_session, agent):
        with pytest.raises(NotFound):
            inventory_service.restock(agent.id, 99999, 5)

        assert db_session.query(InventoryRecord).count() == 0


class TestInventoryQueries:

    def test_quantity_defaults_to_zero(self, db_session, agent, product):
        assert inventory_service.get_quantity(agent.id, product.id) == 0

    def test_agent_inventory_only_lists_that_agent(self, db_session, agent, product, make_stock):
        other = Agent(name="Agent Two")
        db_session.add(other)
        db_session.commit()
        make_stock(agent.id, product.id, 5)
        make_stock(other.id, product.id, 7)

        rows = inventory_service.list_agent_inventory(agent.id)
        assert [(r["agent_id"], r["quantity"]) for r in rows] == [(agent.id, 5)]
        assert len(inventory_service.list_inventory()) == 2

    def test_low_inventory_threshold_is_inclusive(self, db_session, agent, supplier, make_stock):
        products = []
        for name in ("Low", "Edge", "Plenty"):
            p = Product(supplier_id=supplier.id, name=name, price=Decimal("1.00"))
            db_session.add(p)
            products.append(p)
        db_session.commit()

        make_stock(agent.id, products[0].id, 2)
        make_stock(agent.id, products[1].id, 10)
        make_stock(agent.id, products[2].id, 50)

        rows = inventory_service.low_inventory(10)

        assert [row["ProductName"] for row in rows] == ["Low", "Edge"]
        assert rows[0]["quantity"] == 2
        assert rows[0]["AgentName"] == "Agent One"
        assert rows[0]["SupplierName"] == "Acme Foods"

    def test_low_inventory_rejects_negative_threshold(self, db_session):
        with pytest.raises(InvalidArgument):
            inventory_service.low_inventory(-1)


class TestLastUpdateDate:
    """Every quantity change stamps the record."""

    STALE = datetime(2020, 1, 1)

    def _age(self, db_session, record):
        record.last_update_date = self.STALE
        db_session.commit()

    def test_restock_refreshes_existing_record(self, db_session, agent, product, make_stock):
        record = make_stock(agent.id, product.id, 5)
        self._age(db_session, record)

        inventory_service.restock(agent.id, product.id, 3)

        refreshed = db_session.get(InventoryRecord, (agent.id, product.id))
        assert refreshed.quantity == 8
        assert refreshed.last_update_date > self.STALE

    def test_order_decrement_refreshes_record(self, db_session, agent, product, make_stock, order_kwargs):
        record = make_stock(agent.id, product.id, 85)
        self._age(db_session, record)

        order_service.place_order(**order_kwargs)

        refreshed = db_session.get(InventoryRecord, (agent.id, product.id))
        assert refreshed.quantity == 75
        assert refreshed.last_update_date > self.STALE
