from __future__ import annotations

from ..extensions import db


class Customer(db.Model):
    """
    Customer master data.

    condition is a small integer category (e.g. 0 = inactive, 1 = active)
    used as the grouping key of the invoice-totals-by-condition report.
    Identity is assigned by the store on insert; imported source ids are
    informational only.
    """
    __tablename__ = "customers"
    __table_args__ = (
        db.Index("ix_customers_condition", "condition"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(128), nullable=False)
    last_name = db.Column(db.String(128), nullable=False)
    condition = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Customer {self.id} {self.first_name} {self.last_name}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "condition": self.condition,
        }
