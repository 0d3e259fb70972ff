"""
Order placement and order queries.

An order is written as one unit. That unit is the payment, the order header,
one line per product, and the matching inventory decrements. Either every row
is committed or none is.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import NamedTuple, Sequence

from flask import current_app

from ..errors import InvalidArgument, NotFound, SalesError
from ..extensions import db
from ..models import (
    Agent,
    Order,
    OrderLine,
    Payment,
    Product,
    SalesRep,
    Shop,
    ORDER_STATUSES,
    ORDER_STATUS_PROCESSING,
    PAYMENT_METHODS,
)
from ..time_utils import utcnow
from ..validation import require_choice, require_id, require_positive_int, to_money
from .concurrency import begin_write_transaction, lock_for_update, run_in_transaction
from .inventory_service import lock_and_check_availability, reserve_and_decrement


class OrderLineInput(NamedTuple):
    product_id: int
    quantity: int
    price: Decimal


@dataclass(frozen=True)
class OrderResult:
    """Success (order_id set) or failure (error set); never both."""

    order_id: int | None = None
    error: SalesError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status_code(self) -> int:
        return 201 if self.ok else self.error.status_code

    def to_dict(self) -> dict:
        if self.ok:
            return {"orderId": self.order_id}
        return self.error.to_dict()


def lines_from_arrays(product_ids, quantities, prices) -> list[OrderLineInput]:
    """Zip the parallel productIds/quantities/prices arrays of the order API."""
    for field, value in (("productIds", product_ids), ("quantities", quantities), ("prices", prices)):
        if not isinstance(value, (list, tuple)):
            raise InvalidArgument(f"{field} must be an array")
    if not (len(product_ids) == len(quantities) == len(prices)):
        raise InvalidArgument("Product IDs, quantities, and prices arrays must have the same length")
    return [OrderLineInput(*line) for line in zip(product_ids, quantities, prices)]


def _validate_lines(lines: Sequence) -> list[OrderLineInput]:
    if not lines:
        raise InvalidArgument("Order must contain at least one line")

    validated = []
    seen = set()
    for index, line in enumerate(lines):
        try:
            product_id, quantity, price = line
        except (TypeError, ValueError):
            raise InvalidArgument(f"Line {index} must be (product_id, quantity, price)")
        product_id = require_id(product_id, f"productIds[{index}]")
        if product_id in seen:
            raise InvalidArgument(
                f"Product ID {product_id} appears more than once",
                details={"product_id": product_id},
            )
        seen.add(product_id)
        validated.append(OrderLineInput(
            product_id=product_id,
            quantity=require_positive_int(quantity, f"quantities[{index}]"),
            price=to_money(price, f"prices[{index}]"),
        ))
    return validated


def _flag_payment_mismatch(amount: Decimal, lines: list[OrderLineInput]) -> None:
    # The client computes the total; a mismatch is logged, not rejected.
    expected = sum((line.price * line.quantity for line in lines), Decimal("0"))
    if expected != amount:
        current_app.logger.warning(
            "Payment amount %s differs from line total %s", amount, expected
        )


def _require_parties(agent_id: int, shop_id: int, sales_rep_id: int) -> None:
    for model, ident, label in (
        (Agent, agent_id, "Agent"),
        (Shop, shop_id, "Shop"),
        (SalesRep, sales_rep_id, "Sales rep"),
    ):
        if db.session.get(model, ident) is None:
            raise NotFound(f"{label} not found", details={"id": ident})


def place_order(
    *,
    agent_id,
    shop_id,
    sales_rep_id,
    payment_method,
    payment_amount,
    lines: Sequence,
    status=None,
) -> int:
    """
    Create payment, order, lines, and inventory decrements atomically.

    lines is a sequence of (product_id, quantity, price). The price is stored
    as given; it is not re-read from the product.

    Raises InvalidArgument before touching the database. Raises NotFound or
    InsufficientInventory from inside the transaction, after a full rollback.
    Raises TransactionFailure if storage fails.
    """
    agent_id = require_id(agent_id, "agentId")
    shop_id = require_id(shop_id, "shopId")
    sales_rep_id = require_id(sales_rep_id, "salesRepId")
    method = require_choice(payment_method, "paymentMethod", PAYMENT_METHODS)
    amount = to_money(payment_amount, "paymentAmount", allow_zero=False)
    status = ORDER_STATUS_PROCESSING if status is None else require_choice(status, "orderStatus", ORDER_STATUSES)
    lines = _validate_lines(lines)

    _flag_payment_mismatch(amount, lines)

    def _op():
        begin_write_transaction()
        _require_parties(agent_id, shop_id, sales_rep_id)
        lock_and_check_availability(
            agent_id, {line.product_id: line.quantity for line in lines}
        )

        now = utcnow()
        payment = Payment(method=method, amount=amount, payment_date=now)
        db.session.add(payment)
        db.session.flush()

        order = Order(
            agent_id=agent_id,
            shop_id=shop_id,
            sales_rep_id=sales_rep_id,
            payment_id=payment.id,
            status=status,
            created_at=now,
        )
        db.session.add(order)
        db.session.flush()

        for line in lines:
            db.session.add(OrderLine(
                order_id=order.id,
                product_id=line.product_id,
                quantity=line.quantity,
                price=line.price,
                order_date=now,
            ))
            reserve_and_decrement(agent_id, line.product_id, line.quantity)

        order_id = order.id
        db.session.commit()
        return order_id

    order_id = run_in_transaction(_op, action="create order")
    current_app.logger.info(
        "Order %s placed by agent %s for shop %s (%d lines)",
        order_id, agent_id, shop_id, len(lines),
    )
    return order_id


def submit_order(**kwargs) -> OrderResult:
    """place_order with errors returned as values instead of raised."""
    try:
        return OrderResult(order_id=place_order(**kwargs))
    except SalesError as exc:
        return OrderResult(error=exc)


def update_order_status(order_id, status) -> Order:
    order_id = require_id(order_id, "order_id")
    if not status:
        raise InvalidArgument("Status is required")
    status = require_choice(status, "status", ORDER_STATUSES)

    def _op():
        begin_write_transaction()
        order = lock_for_update(db.session.query(Order).filter_by(id=order_id)).first()
        if order is None:
            raise NotFound("Order not found", details={"order_id": order_id})
        order.status = status
        db.session.commit()
        return order

    return run_in_transaction(_op, action="update order status")


def orders_for_agent(agent_id) -> list[dict]:
    agent_id = require_id(agent_id, "agent_id")
    orders = db.session.query(Order).filter_by(agent_id=agent_id).order_by(Order.id).all()
    return [order.to_dict() for order in orders]


def orders_for_sales_rep(sales_rep_id) -> list[dict]:
    sales_rep_id = require_id(sales_rep_id, "sales_rep_id")
    orders = db.session.query(Order).filter_by(sales_rep_id=sales_rep_id).order_by(Order.id).all()
    return [order.to_dict() for order in orders]


def order_items(order_id) -> list[dict]:
    """Lines of one order with the product name."""
    order_id = require_id(order_id, "order_id")
    if db.session.get(Order, order_id) is None:
        raise NotFound("Order not found", details={"order_id": order_id})

    rows = db.session.query(OrderLine, Product.name).join(
        Product, OrderLine.product_id == Product.id
    ).filter(OrderLine.order_id == order_id).order_by(OrderLine.product_id).all()

    items = []
    for line, product_name in rows:
        item = line.to_dict()
        item["product_name"] = product_name
        items.append(item)
    return items
