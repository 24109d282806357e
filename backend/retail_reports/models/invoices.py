from __future__ import annotations

from ..extensions import db
from ..money_utils import to_money


class Invoice(db.Model):
    """
    Invoice header owned by one customer.

    WHY: total is a derived value. Imports write whatever the source carries
    (often 0.0) and the aggregation engine's recompute makes it
    authoritative as SUM(sale.quantity * product.price).
    datetime is kept verbatim as the source string.
    """
    __tablename__ = "invoices"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    datetime = db.Column(db.String(32), nullable=False)
    total = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), nullable=False, index=True)

    customer = db.relationship("Customer", backref=db.backref("invoices", lazy=True))

    def __repr__(self) -> str:
        return f"<Invoice {self.id} customer={self.customer_id}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "datetime": self.datetime,
            "total": to_money(self.total),
            "customer_id": self.customer_id,
        }
