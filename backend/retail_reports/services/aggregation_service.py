# Overview: Service-layer aggregation engine; derives invoice totals and ranked/grouped reports.

"""
Aggregation Invariants (authoritative)

- Every operation is a full pass expressed as one set-oriented store statement.
- recompute_invoice_totals is idempotent; invoices without sales total 0.
- Rankings are deterministic: ties break on id ascending.
- Amounts keep full decimal precision here; rounding belongs to presentation.
- Store errors propagate unmodified; nothing is retried.
"""

from __future__ import annotations

from flask import current_app

from ..repositories.protocols import ConditionTotal, ReportStore, TopCustomer, TopProduct
from ..repositories.sqlalchemy_store import SQLAlchemyStore
from ..validation import MAX_INT

DEFAULT_TOP_LIMIT = 5


class ReportError(ValueError):
    """Raised when report parameters are invalid."""


def _check_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_INT:
        raise ReportError("limit must be a positive integer")
    return limit


def parse_limit(raw: str | None, default: int) -> int:
    """Query-string limit: absent means default, anything but a plain positive integer is rejected."""
    if raw is None:
        return default
    text = raw.strip()
    if not text.isdigit():
        raise ReportError("limit must be a positive integer")
    return _check_limit(int(text))


class AggregationEngine:
    def __init__(self, store: ReportStore):
        self.store = store

    def recompute_invoice_totals(self) -> None:
        """Set every invoice total to SUM(sale.quantity * product.price) over its sales."""
        self.store.recompute_invoice_totals()
        current_app.logger.info("Recomputed invoice totals")

    def top_products(self, limit: int = DEFAULT_TOP_LIMIT) -> list[TopProduct]:
        """
        Best sellers by units sold (SUM(sale.quantity)), descending.

        Products without sales never appear; ties break on product id ascending.
        """
        return self.store.top_products(_check_limit(limit))

    def invoice_totals_by_customer_condition(self) -> list[ConditionTotal]:
        """SUM(invoice.total) per customer condition, one entry per condition with invoices."""
        return self.store.totals_by_condition()

    def top_customers(self, limit: int = DEFAULT_TOP_LIMIT) -> list[TopCustomer]:
        """
        Customers by SUM(invoice.total), descending.

        Customers without invoices rank with amount 0; ties break on customer id ascending.
        """
        return self.store.top_customers(_check_limit(limit))


def default_engine() -> AggregationEngine:
    return AggregationEngine(SQLAlchemyStore())
