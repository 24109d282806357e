from __future__ import annotations

from ..extensions import db
from ..money_utils import to_money


class Product(db.Model):
    """Catalog product; price is a non-negative decimal amount."""
    __tablename__ = "products"
    __table_args__ = (
        db.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    description = db.Column(db.String(255), nullable=False)
    price = db.Column(db.Numeric(12, 2), nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Product {self.id} {self.description}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "price": to_money(self.price),
        }
