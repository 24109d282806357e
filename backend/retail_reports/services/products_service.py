# Overview: Service-layer operations for products; reads and ad-hoc creates through the store.

from __future__ import annotations

from ..models import Product
from ..repositories.protocols import Store
from ..repositories.sqlalchemy_store import SQLAlchemyStore


def list_products(store: Store | None = None) -> list[Product]:
    store = store or SQLAlchemyStore()
    return store.products.find_all()


def create_product(*, patch: dict, store: Store | None = None) -> Product:
    store = store or SQLAlchemyStore()
    product = Product(**patch)
    store.products.save(product)
    return product
