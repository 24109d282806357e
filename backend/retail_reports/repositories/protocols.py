"""Persistence capability consumed by the loader and the aggregation engine.

Invariants:
    - Services receive a store object, never a database handle or session
    - save() persists one entity, assigns its id and returns it
    - Every method raises StoreError (or its ReferentialViolation subclass)
      on failure; an empty result is an empty list, never None
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class TopProduct:
    id: int
    description: str
    total: int  # units sold, not currency


@dataclass(frozen=True)
class ConditionTotal:
    condition: int
    total: Decimal


@dataclass(frozen=True)
class TopCustomer:
    id: int
    first_name: str
    last_name: str
    amount: Decimal


class EntityRepository(Protocol[T]):
    """Contract for per-kind persistence (customers, invoices, products, sales)."""
    def find_all(self) -> list[T]: ...
    def save(self, entity: T) -> int: ...


class ReportStore(Protocol):
    """Contract for the set-oriented aggregate statements."""
    def recompute_invoice_totals(self) -> None: ...
    def top_products(self, limit: int) -> list[TopProduct]: ...
    def totals_by_condition(self) -> list[ConditionTotal]: ...
    def top_customers(self, limit: int) -> list[TopCustomer]: ...


class Store(ReportStore, Protocol):
    """Full capability: one repository per entity kind plus the report statements."""
    customers: EntityRepository
    invoices: EntityRepository
    products: EntityRepository
    sales: EntityRepository
