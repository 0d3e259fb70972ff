from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class Supplier(db.Model):
    """Owner of a product catalog."""
    __tablename__ = "suppliers"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Supplier id={self.id} name={self.name!r}>"

    def to_dict(self) -> dict:
        return {
            "supplier_id": self.id,
            "name": self.name,
            "created_at": to_utc_z(self.created_at),
        }


class Agent(db.Model):
    """
    Field distributor.

    Agents hold physical stock (one InventoryRecord per product) and place
    orders on behalf of shops.
    """
    __tablename__ = "agents"
    __table_args__ = (
        db.Index("ix_agents_name", "name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    phone_no = db.Column(db.String(20), nullable=True)
    location = db.Column(db.String(100), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Agent id={self.id} name={self.name!r}>"

    def to_dict(self) -> dict:
        return {
            "agent_id": self.id,
            "name": self.name,
            "phone_no": self.phone_no,
            "location": self.location,
            "created_at": to_utc_z(self.created_at),
        }


class SalesRep(db.Model):
    """Territory-scoped staff member associated with a set of shops."""
    __tablename__ = "sales_reps"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    territory = db.Column(db.String(100), nullable=True)
    phone_number = db.Column(db.String(20), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "sales_rep_id": self.id,
            "name": self.name,
            "territory": self.territory,
            "phone_number": self.phone_number,
            "created_at": to_utc_z(self.created_at),
        }


class Shop(db.Model):
    """End customer receiving orders."""
    __tablename__ = "shops"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    address = db.Column(db.String(200), nullable=True)
    phone_number = db.Column(db.String(20), nullable=True)
    sales_rep_id = db.Column(db.Integer, db.ForeignKey("sales_reps.id"), nullable=True, index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    sales_rep = db.relationship("SalesRep", backref=db.backref("shops", lazy=True))

    def to_dict(self) -> dict:
        return {
            "shop_id": self.id,
            "name": self.name,
            "address": self.address,
            "phone_number": self.phone_number,
            "sales_rep_id": self.sales_rep_id,
        }
