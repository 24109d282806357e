# Overview: Service-layer operations for invoices; reads and ad-hoc creates through the store.

from __future__ import annotations

from ..models import Invoice
from ..repositories.protocols import Store
from ..repositories.sqlalchemy_store import SQLAlchemyStore


def list_invoices(store: Store | None = None) -> list[Invoice]:
    store = store or SQLAlchemyStore()
    return store.invoices.find_all()


def create_invoice(*, patch: dict, store: Store | None = None) -> Invoice:
    """
    Persist one invoice header.

    total defaults to 0 and stays as given until the next recompute; a
    customer_id with no matching customer raises ReferentialViolation.
    """
    store = store or SQLAlchemyStore()
    invoice = Invoice(**patch)
    store.invoices.save(invoice)
    return invoice
