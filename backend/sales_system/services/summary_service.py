# Overview: Read-side order summary projection consumed by the dashboards.

from __future__ import annotations

from sqlalchemy import func

from ..extensions import db
from ..models import Agent, Order, OrderLine, Payment, SalesRep, Shop
from ..time_utils import to_utc_z
from ..validation import money_to_json


def order_summaries() -> list[dict]:
    """
    One denormalized row per order.

    Lines are inner-joined, so an order without lines has nothing to
    aggregate and is left out. OrderDate is the latest line date.
    Recomputed on every call.
    """
    total_value = func.sum(OrderLine.quantity * OrderLine.price)

    rows = db.session.query(
        Order.id.label("order_id"),
        Order.agent_id,
        Order.sales_rep_id,
        Agent.name.label("agent_name"),
        Shop.name.label("shop_name"),
        SalesRep.name.label("sales_rep_name"),
        Payment.method.label("payment_method"),
        Payment.amount.label("payment_amount"),
        Order.status,
        func.count(OrderLine.product_id).label("total_items"),
        func.sum(OrderLine.quantity).label("total_quantity"),
        total_value.label("total_value"),
        func.max(OrderLine.order_date).label("order_date"),
    ).join(
        Agent, Order.agent_id == Agent.id
    ).join(
        Shop, Order.shop_id == Shop.id
    ).join(
        SalesRep, Order.sales_rep_id == SalesRep.id
    ).join(
        Payment, Order.payment_id == Payment.id
    ).join(
        OrderLine, OrderLine.order_id == Order.id
    ).group_by(
        Order.id,
        Order.agent_id,
        Order.sales_rep_id,
        Agent.name,
        Shop.name,
        SalesRep.name,
        Payment.method,
        Payment.amount,
        Order.status,
    ).order_by(Order.id).all()

    return [
        {
            "order_id": row.order_id,
            "agent_id": row.agent_id,
            "sales_rep_id": row.sales_rep_id,
            "AgentName": row.agent_name,
            "ShopName": row.shop_name,
            "SalesRepName": row.sales_rep_name,
            "PaymentMethod": row.payment_method,
            "PaymentAmount": money_to_json(row.payment_amount),
            "status": row.status,
            "TotalItems": int(row.total_items or 0),
            "TotalQuantity": int(row.total_quantity or 0),
            "TotalOrderValue": _as_money(row.total_value),
            "OrderDate": to_utc_z(row.order_date),
        }
        for row in rows
    ]


def _as_money(value) -> float:
    if value is None:
        return 0.0
    return round(float(value), 2)
