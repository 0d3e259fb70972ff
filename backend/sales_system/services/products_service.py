# Overview: Service-layer operations for the supplier product catalog.

from __future__ import annotations

from flask import current_app

from ..errors import NotFound
from ..extensions import db
from ..models import PriceHistory, Product, Supplier
from ..time_utils import utcnow
from ..validation import (
    DESCRIPTION_MAX,
    optional_text,
    require_id,
    require_non_negative_int,
    require_text,
    to_money,
)
from .concurrency import begin_write_transaction, lock_for_update, run_in_transaction
from .inventory_service import seed_product_inventory


def list_products() -> list[dict]:
    products = db.session.query(Product).order_by(Product.id).all()
    return [product.to_dict() for product in products]


def products_for_supplier(supplier_id) -> list[dict]:
    supplier_id = require_id(supplier_id, "supplier_id")
    products = db.session.query(Product).filter_by(
        supplier_id=supplier_id
    ).order_by(Product.id).all()
    return [product.to_dict() for product in products]


def create_product(
    *,
    supplier_id,
    name,
    price,
    description=None,
    initial_quantity=None,
) -> tuple[Product, int]:
    """
    Insert a product and seed every existing agent with initial stock.

    Both happen in one transaction. Returns (product, agents_seeded).
    """
    supplier_id = require_id(supplier_id, "supplier_id")
    name = require_text(name, "name")
    description = optional_text(description, "description", max_length=DESCRIPTION_MAX)
    price = to_money(price, "price", allow_zero=False)
    if initial_quantity is None:
        initial_quantity = current_app.config["DEFAULT_INITIAL_QUANTITY"]
    initial_quantity = require_non_negative_int(initial_quantity, "initial_quantity")

    def _op():
        begin_write_transaction()
        if db.session.get(Supplier, supplier_id) is None:
            raise NotFound("Supplier not found", details={"supplier_id": supplier_id})

        product = Product(
            supplier_id=supplier_id,
            name=name,
            description=description,
            price=price,
        )
        db.session.add(product)
        db.session.flush()

        seeded = seed_product_inventory(product.id, initial_quantity)
        db.session.commit()
        return product, seeded

    product, seeded = run_in_transaction(_op, action="create product")
    current_app.logger.info(
        "Product %s created with %d units for %d agents", product.id, initial_quantity, seeded
    )
    return product, seeded


def update_product(product_id, *, name, price, description=None) -> Product:
    """
    Update name/description/price in place.

    A price change appends a PriceHistory row in the same transaction.
    """
    product_id = require_id(product_id, "product_id")
    name = require_text(name, "name")
    description = optional_text(description, "description", max_length=DESCRIPTION_MAX)
    price = to_money(price, "price", allow_zero=False)

    def _op():
        begin_write_transaction()
        product = lock_for_update(db.session.query(Product).filter_by(id=product_id)).first()
        if product is None:
            raise NotFound("Product not found", details={"product_id": product_id})

        old_price = product.price
        product.name = name
        product.description = description
        product.price = price

        if old_price != price:
            db.session.add(PriceHistory(
                product_id=product.id,
                old_price=old_price,
                new_price=price,
                change_date=utcnow(),
            ))

        db.session.commit()
        return product

    return run_in_transaction(_op, action="update product")


def price_history() -> list[dict]:
    entries = db.session.query(PriceHistory).order_by(
        PriceHistory.product_id, PriceHistory.change_date, PriceHistory.id
    ).all()
    return [entry.to_dict() for entry in entries]
