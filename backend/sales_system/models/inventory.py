from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class InventoryRecord(db.Model):
    """
    On-hand quantity of one product held by one agent.

    Exactly one row per (agent, product); quantity never drops below zero.
    The CHECK constraint backs up the service-layer check.
    """
    __tablename__ = "inventory"
    __table_args__ = (
        db.CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        db.Index("ix_inventory_quantity", "quantity"),
    )

    agent_id = db.Column(db.Integer, db.ForeignKey("agents.id"), primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), primary_key=True)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    last_update_date = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    agent = db.relationship("Agent", backref=db.backref("inventory", lazy=True, cascade="all, delete-orphan"))
    product = db.relationship("Product", backref=db.backref("inventory", lazy=True))

    def __repr__(self) -> str:
        return f"<InventoryRecord agent_id={self.agent_id} product_id={self.product_id} quantity={self.quantity}>"

    def to_dict(self) -> dict:
        return {
            "agent_id": self.agent_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "last_update_date": to_utc_z(self.last_update_date),
        }
