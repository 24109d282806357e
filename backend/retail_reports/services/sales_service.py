# Overview: Service-layer operations for sales; reads and ad-hoc creates through the store.

from __future__ import annotations

from ..models import Sale
from ..repositories.protocols import Store
from ..repositories.sqlalchemy_store import SQLAlchemyStore


def list_sales(store: Store | None = None) -> list[Sale]:
    """All sales in id order."""
    store = store or SQLAlchemyStore()
    return store.sales.find_all()


def create_sale(*, patch: dict, store: Store | None = None) -> Sale:
    """Append a line item. Does not touch the owning invoice total."""
    store = store or SQLAlchemyStore()
    sale = Sale(**patch)
    store.sales.save(sale)
    return sale
