"""
Pytest fixtures for sales system backend tests.

Provides test database setup, directory/catalog factories, and test client.
"""

from decimal import Decimal

import pytest

from sales_system import create_app
from sales_system.extensions import db
from sales_system.models import Agent, InventoryRecord, Product, SalesRep, Shop, Supplier


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def supplier(db_session):
    supplier = Supplier(name="Acme Foods")
    db_session.add(supplier)
    db_session.commit()
    return supplier


@pytest.fixture(scope='function')
def agent(db_session):
    agent = Agent(name="Agent One", phone_no="555-0101", location="North")
    db_session.add(agent)
    db_session.commit()
    return agent


@pytest.fixture(scope='function')
def sales_rep(db_session):
    rep = SalesRep(name="Rep One", territory="North", phone_number="555-0201")
    db_session.add(rep)
    db_session.commit()
    return rep


@pytest.fixture(scope='function')
def shop(db_session, sales_rep):
    shop = Shop(name="Corner Shop", address="1 Main St", phone_number="555-0301", sales_rep_id=sales_rep.id)
    db_session.add(shop)
    db_session.commit()
    return shop


@pytest.fixture(scope='function')
def product(db_session, supplier):
    product = Product(supplier_id=supplier.id, name="Olive Oil", price=Decimal("15.25"))
    db_session.add(product)
    db_session.commit()
    return product


@pytest.fixture(scope='function')
def make_stock(db_session):
    """Set an agent's on-hand quantity for a product directly."""
    def _make(agent_id, product_id, quantity):
        record = InventoryRecord(agent_id=agent_id, product_id=product_id, quantity=quantity)
        db_session.add(record)
        db_session.commit()
        return record
    return _make


@pytest.fixture(scope='function')
def stocked(db_session, agent, product, make_stock):
    """Agent holding 85 units of product."""
    make_stock(agent.id, product.id, 85)
    return {"agent_id": agent.id, "product_id": product.id}


@pytest.fixture(scope='function')
def order_kwargs(agent, shop, sales_rep, product):
    """Keyword arguments for a valid single-line order (10 x 15.25)."""
    return {
        "agent_id": agent.id,
        "shop_id": shop.id,
        "sales_rep_id": sales_rep.id,
        "payment_method": "Credit Card",
        "payment_amount": "152.50",
        "lines": [(product.id, 10, "15.25")],
    }
