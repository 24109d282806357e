# Overview: Service-layer operations for customers; reads and ad-hoc creates through the store.

from __future__ import annotations

from ..models import Customer
from ..repositories.protocols import Store
from ..repositories.sqlalchemy_store import SQLAlchemyStore


def list_customers(store: Store | None = None) -> list[Customer]:
    store = store or SQLAlchemyStore()
    return store.customers.find_all()


def create_customer(*, patch: dict, store: Store | None = None) -> Customer:
    """Persist one customer from a validated patch; the store assigns its id."""
    store = store or SQLAlchemyStore()
    customer = Customer(**patch)
    store.customers.save(customer)
    return customer
