from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow
from ..validation import money_to_json


class Product(db.Model):
    """
    Supplier-owned catalog entry.

    price is the current list price. Orders capture their own price per line,
    so changing it never rewrites order history.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_supplier_name", "supplier_id", "name"),
        db.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    supplier_id = db.Column(db.Integer, db.ForeignKey("suppliers.id"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500), nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    supplier = db.relationship("Supplier", backref=db.backref("products", lazy=True))

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} supplier_id={self.supplier_id}>"

    def to_dict(self) -> dict:
        return {
            "product_id": self.id,
            "supplier_id": self.supplier_id,
            "name": self.name,
            "description": self.description,
            "price": money_to_json(self.price),
            "supplier_name": self.supplier.name if self.supplier else None,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class PriceHistory(db.Model):
    """Append-only audit of product price changes."""
    __tablename__ = "product_price_history"
    __table_args__ = (
        db.Index("ix_price_history_product_date", "product_id", "change_date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)
    old_price = db.Column(db.Numeric(10, 2), nullable=False)
    new_price = db.Column(db.Numeric(10, 2), nullable=False)
    change_date = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    product = db.relationship("Product", backref=db.backref("price_history", lazy=True))

    def to_dict(self) -> dict:
        return {
            "history_id": self.id,
            "product_id": self.product_id,
            "product_name": self.product.name if self.product else None,
            "old_price": money_to_json(self.old_price),
            "new_price": money_to_json(self.new_price),
            "change_date": to_utc_z(self.change_date),
        }
