# Overview: Concurrent order placement against a file-backed SQLite database.

"""
Two orders racing for the same stock must never oversell.

Each worker runs in its own thread, app context and connection, so the write
lock taken at the start of order placement is what serializes them.
"""

import threading
from decimal import Decimal

import pytest

from sales_system import create_app
from sales_system.errors import InsufficientInventory
from sales_system.extensions import db
from sales_system.models import Agent, InventoryRecord, OrderLine, Product, SalesRep, Shop, Supplier
from sales_system.services import inventory_service, order_service


@pytest.fixture
def file_app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'concurrency.db'}",
    })

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def seeded(file_app):
    with file_app.app_context():
        supplier = Supplier(name="Race Supplier")
        agent = Agent(name="Race Agent")
        rep = SalesRep(name="Race Rep")
        db.session.add_all([supplier, agent, rep])
        db.session.commit()

        shop = Shop(name="Race Shop", sales_rep_id=rep.id)
        product = Product(supplier_id=supplier.id, name="Race Product", price=Decimal("15.25"))
        db.session.add_all([shop, product])
        db.session.commit()

        db.session.add(InventoryRecord(agent_id=agent.id, product_id=product.id, quantity=85))
        db.session.commit()

        ids = {
            "agent_id": agent.id,
            "shop_id": shop.id,
            "sales_rep_id": rep.id,
            "product_id": product.id,
        }
        db.session.remove()
    return ids


def test_concurrent_orders_cannot_oversell(file_app, seeded):
    results = []
    lock = threading.Lock()
    barrier = threading.Barrier(2)

    def worker():
        with file_app.app_context():
            try:
                barrier.wait()
                order_id = order_service.place_order(
                    agent_id=seeded["agent_id"],
                    shop_id=seeded["shop_id"],
                    sales_rep_id=seeded["sales_rep_id"],
                    payment_method="Bank Transfer",
                    payment_amount="762.50",
                    lines=[(seeded["product_id"], 50, "15.25")],
                )
                with lock:
                    results.append(order_id)
            except Exception as exc:
                with lock:
                    results.append(exc)
            finally:
                db.session.remove()

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    successes = [r for r in results if isinstance(r, int)]
    failures = [r for r in results if isinstance(r, Exception)]
    assert len(successes) == 1, results
    assert len(failures) == 1, results
    assert isinstance(failures[0], InsufficientInventory)
    assert failures[0].available == 35

    with file_app.app_context():
        assert inventory_service.get_quantity(seeded["agent_id"], seeded["product_id"]) == 35
        assert db.session.query(OrderLine).count() == 1
        db.session.remove()
