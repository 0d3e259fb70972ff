from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow
from ..validation import money_to_json


PAYMENT_METHODS = ("Credit Card", "Bank Transfer", "PayPal", "Check")

ORDER_STATUS_PROCESSING = "Processing"
ORDER_STATUSES = (ORDER_STATUS_PROCESSING, "Shipped", "Delivered", "Cancelled")


class Payment(db.Model):
    """One payment per order, written with the order and never changed."""
    __tablename__ = "payments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    method = db.Column(db.String(50), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    payment_date = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "payment_id": self.id,
            "method": self.method,
            "amount": money_to_json(self.amount),
            "payment_date": to_utc_z(self.payment_date),
        }


class Order(db.Model):
    """
    Order header.

    Owns its Payment (1:1) and its OrderLines. status is the only field
    that changes after creation.
    """
    __tablename__ = "orders"
    __table_args__ = (
        db.Index("ix_orders_agent", "agent_id"),
        db.Index("ix_orders_sales_rep", "sales_rep_id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    agent_id = db.Column(db.Integer, db.ForeignKey("agents.id"), nullable=False)
    shop_id = db.Column(db.Integer, db.ForeignKey("shops.id"), nullable=False, index=True)
    sales_rep_id = db.Column(db.Integer, db.ForeignKey("sales_reps.id"), nullable=False)
    payment_id = db.Column(db.Integer, db.ForeignKey("payments.id"), nullable=False, unique=True)
    status = db.Column(db.String(50), nullable=False, default=ORDER_STATUS_PROCESSING)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    agent = db.relationship("Agent", backref=db.backref("orders", lazy=True))
    shop = db.relationship("Shop")
    sales_rep = db.relationship("SalesRep")
    payment = db.relationship("Payment", backref=db.backref("order", uselist=False))

    def to_dict(self) -> dict:
        return {
            "order_id": self.id,
            "agent_id": self.agent_id,
            "shop_id": self.shop_id,
            "sales_rep_id": self.sales_rep_id,
            "payment_id": self.payment_id,
            "status": self.status,
            "created_at": to_utc_z(self.created_at),
        }


class OrderLine(db.Model):
    """Line item; price is captured at sale time, not read from Product."""
    __tablename__ = "order_items"
    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )

    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), primary_key=True)
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    order_date = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    order = db.relationship("Order", backref=db.backref("lines", lazy=True))
    product = db.relationship("Product")

    def to_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "price": money_to_json(self.price),
            "order_date": to_utc_z(self.order_date),
        }
