# Overview: Service-layer operations for the agent inventory ledger.

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from ..errors import InsufficientInventory, NotFound
from ..extensions import db
from ..models import Agent, InventoryRecord, Product, Supplier
from ..time_utils import utcnow
from ..validation import require_id, require_non_negative_int, require_positive_int
from .concurrency import (
    RETRYABLE_ERRORS,
    begin_write_transaction,
    lock_for_update,
    run_in_transaction,
)
"""
Inventory Ledger Invariants (authoritative)

- One InventoryRecord per (agent, product); quantity >= 0 at every
  observable point.
- Records are created lazily: on the first restock, or by the product
  creation fan-out (one record per existing agent).
- Restock is additive. Two restocks of 10 add 20.
- Decrements happen only inside the order-placement transaction, against a
  row locked with SELECT ... FOR UPDATE (BEGIN IMMEDIATE on SQLite).
- No caching: every read goes to the database.
"""


def _inventory_query():
    return db.session.query(
        InventoryRecord,
        Product.name.label("product_name"),
        Agent.name.label("agent_name"),
        Supplier.name.label("supplier_name"),
    ).join(
        Product, InventoryRecord.product_id == Product.id
    ).join(
        Agent, InventoryRecord.agent_id == Agent.id
    ).join(
        Supplier, Product.supplier_id == Supplier.id
    )


def _joined_row(row) -> dict:
    record, product_name, agent_name, supplier_name = row
    data = record.to_dict()
    data.update(
        product_name=product_name,
        agent_name=agent_name,
        supplier_name=supplier_name,
    )
    return data


def _locked_record(agent_id: int, product_id: int) -> InventoryRecord | None:
    return lock_for_update(
        db.session.query(InventoryRecord).filter_by(agent_id=agent_id, product_id=product_id)
    ).first()


def get_quantity(agent_id: int, product_id: int) -> int:
    """On-hand quantity; 0 when the agent has never held the product."""
    qty = db.session.query(InventoryRecord.quantity).filter_by(
        agent_id=agent_id, product_id=product_id
    ).scalar()
    return int(qty or 0)


def get_inventory_row(agent_id: int, product_id: int) -> dict | None:
    row = _inventory_query().filter(
        InventoryRecord.agent_id == agent_id,
        InventoryRecord.product_id == product_id,
    ).first()
    return _joined_row(row) if row else None


def list_inventory() -> list[dict]:
    rows = _inventory_query().order_by(InventoryRecord.agent_id, InventoryRecord.product_id).all()
    return [_joined_row(row) for row in rows]


def list_agent_inventory(agent_id: int) -> list[dict]:
    agent_id = require_id(agent_id, "agent_id")
    rows = _inventory_query().filter(
        InventoryRecord.agent_id == agent_id
    ).order_by(InventoryRecord.product_id).all()
    return [_joined_row(row) for row in rows]


def low_inventory(threshold) -> list[dict]:
    """Inventory rows with quantity <= threshold, lowest stock first."""
    threshold = require_non_negative_int(threshold, "threshold")
    rows = _inventory_query().filter(
        InventoryRecord.quantity <= threshold
    ).order_by(
        InventoryRecord.quantity.asc(),
        InventoryRecord.agent_id,
        InventoryRecord.product_id,
    ).all()
    return [
        {
            "product_id": record.product_id,
            "agent_id": record.agent_id,
            "ProductName": product_name,
            "quantity": record.quantity,
            "AgentName": agent_name,
            "SupplierName": supplier_name,
        }
        for record, product_name, agent_name, supplier_name in rows
    ]


def restock(agent_id, product_id, quantity) -> dict:
    """
    Add quantity units to an agent's stock of a product.

    Creates the record on first restock. Returns the updated record joined
    with product/agent/supplier names.
    """
    delta = require_positive_int(quantity, "quantity")
    agent_id = require_id(agent_id, "agent_id")
    product_id = require_id(product_id, "product_id")

    def _op():
        begin_write_transaction()
        if db.session.get(Agent, agent_id) is None:
            raise NotFound("Agent not found", details={"agent_id": agent_id})
        if db.session.get(Product, product_id) is None:
            raise NotFound("Product not found", details={"product_id": product_id})

        now = utcnow()
        record = _locked_record(agent_id, product_id)
        if record is None:
            record = InventoryRecord(
                agent_id=agent_id,
                product_id=product_id,
                quantity=delta,
                last_update_date=now,
            )
            db.session.add(record)
        else:
            record.quantity = record.quantity + delta
            record.last_update_date = now

        db.session.commit()
        return get_inventory_row(agent_id, product_id)

    # A concurrent first restock of the same key loses the insert race with an
    # IntegrityError; the retry then finds the row and increments it.
    return run_in_transaction(
        _op,
        action="restock inventory",
        retry_on=RETRYABLE_ERRORS + (IntegrityError,),
    )


def lock_and_check_availability(agent_id: int, requested: dict[int, int]) -> dict[int, InventoryRecord]:
    """
    Lock every (agent, product) row in requested and verify stock covers it.

    requested maps product_id -> quantity, in caller order; the first short
    product is the one reported. Rows are locked in product-id order so
    concurrent orders cannot deadlock on each other. Must run inside the
    caller's write transaction.
    """
    records = {
        record.product_id: record
        for record in lock_for_update(
            db.session.query(InventoryRecord).filter(
                InventoryRecord.agent_id == agent_id,
                InventoryRecord.product_id.in_(list(requested)),
            ).order_by(InventoryRecord.product_id)
        ).all()
    }

    for product_id, qty in requested.items():
        _ensure_covers(agent_id, product_id, records.get(product_id), qty)
    return records


def reserve_and_decrement(agent_id: int, product_id: int, quantity: int) -> InventoryRecord:
    """
    Take quantity units out of stock.

    Only called from inside the order-placement transaction; does not commit.
    """
    record = _locked_record(agent_id, product_id)
    _ensure_covers(agent_id, product_id, record, quantity)

    record.quantity = record.quantity - quantity
    record.last_update_date = utcnow()
    db.session.flush()
    return record


def _ensure_covers(agent_id: int, product_id: int, record: InventoryRecord | None, qty: int) -> None:
    if record is None:
        raise InsufficientInventory(
            f"No inventory record found for product ID {product_id} and agent ID {agent_id}",
            product_id=product_id,
            available=0,
            requested=qty,
        )
    if record.quantity < qty:
        raise InsufficientInventory(
            f"Insufficient inventory for product ID {product_id}. "
            f"Available: {record.quantity}, Requested: {qty}",
            product_id=product_id,
            available=record.quantity,
            requested=qty,
        )


def seed_product_inventory(product_id: int, quantity: int) -> int:
    """
    Give every existing agent a record for a new product.

    Runs inside the product-creation transaction; does not commit.
    Returns the number of agents seeded.
    """
    now = utcnow()
    agent_ids = [agent_id for (agent_id,) in db.session.query(Agent.id).order_by(Agent.id).all()]
    for agent_id in agent_ids:
        db.session.add(InventoryRecord(
            agent_id=agent_id,
            product_id=product_id,
            quantity=quantity,
            last_update_date=now,
        ))
    db.session.flush()
    return len(agent_ids)
