from __future__ import annotations

from ..extensions import db


class Sale(db.Model):
    """Line item: quantity units of one product on one invoice."""
    __tablename__ = "sales"
    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_sales_quantity_positive"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)
    invoice_id = db.Column(db.Integer, db.ForeignKey("invoices.id"), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)

    invoice = db.relationship("Invoice", backref=db.backref("sales", lazy=True))
    product = db.relationship("Product")

    def __repr__(self) -> str:
        return f"<Sale {self.id} invoice={self.invoice_id} product={self.product_id}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "invoice_id": self.invoice_id,
            "quantity": self.quantity,
        }
