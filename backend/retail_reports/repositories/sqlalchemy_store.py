# Overview: SQLAlchemy implementation of the persistence capability; every aggregate is one SQL statement.

from __future__ import annotations

from contextlib import contextmanager
from typing import Generic, Iterator, Type, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..extensions import db
from ..models import Customer, Invoice, Product, Sale
from ..money_utils import to_decimal
from .errors import ReferentialViolation, StoreError
from .protocols import ConditionTotal, TopCustomer, TopProduct

T = TypeVar("T")


def _is_foreign_key_failure(exc: IntegrityError) -> bool:
    # sqlite: "FOREIGN KEY constraint failed"; mysql/postgres: "... foreign key constraint ..."
    return "foreign key" in str(exc.orig).lower()


@contextmanager
def _store_errors(session: Session) -> Iterator[None]:
    """Roll back and translate driver errors into StoreError kinds."""
    try:
        yield
    except IntegrityError as exc:
        session.rollback()
        if _is_foreign_key_failure(exc):
            raise ReferentialViolation(str(exc.orig)) from exc
        raise StoreError(str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise StoreError(str(exc)) from exc
    except OverflowError as exc:
        # raised unwrapped by the driver when binding an int wider than INTEGER
        session.rollback()
        raise StoreError(str(exc)) from exc


class SQLAlchemyRepository(Generic[T]):
    """find_all/save for one mapped entity class."""

    def __init__(self, session: Session, model: Type[T]):
        self.session = session
        self.model = model

    def find_all(self) -> list[T]:
        with _store_errors(self.session):
            return (
                self.session.query(self.model)
                .order_by(self.model.id.asc())
                .all()
            )

    def save(self, entity: T) -> int:
        """Insert one entity in its own transaction and return the assigned id."""
        with _store_errors(self.session):
            self.session.add(entity)
            self.session.flush()
            assigned_id = int(entity.id)
            self.session.commit()
        return assigned_id


class SQLAlchemyStore:
    """
    Store backed by a SQLAlchemy session (defaults to the Flask-SQLAlchemy
    scoped session of the current app context).
    """

    def __init__(self, session: Session | None = None):
        self.session = session if session is not None else db.session
        self.customers = SQLAlchemyRepository(self.session, Customer)
        self.invoices = SQLAlchemyRepository(self.session, Invoice)
        self.products = SQLAlchemyRepository(self.session, Product)
        self.sales = SQLAlchemyRepository(self.session, Sale)

    def recompute_invoice_totals(self) -> None:
        # Single correlated UPDATE; invoices without sales fall back to 0.
        line_total = (
            select(func.coalesce(func.sum(Sale.quantity * Product.price), 0))
            .select_from(Sale)
            .join(Product, Sale.product_id == Product.id)
            .where(Sale.invoice_id == Invoice.id)
            .scalar_subquery()
        )
        stmt = (
            update(Invoice)
            .values(total=line_total)
            .execution_options(synchronize_session=False)
        )
        with _store_errors(self.session):
            self.session.execute(stmt)
            self.session.commit()

    def top_products(self, limit: int) -> list[TopProduct]:
        sold = func.sum(Sale.quantity).label("total")
        with _store_errors(self.session):
            rows = (
                self.session.query(
                    Product.id.label("id"),
                    Product.description.label("description"),
                    sold,
                )
                .join(Sale, Sale.product_id == Product.id)
                .group_by(Product.id, Product.description)
                .order_by(sold.desc(), Product.id.asc())
                .limit(limit)
                .all()
            )
        return [
            TopProduct(id=row.id, description=row.description, total=int(row.total or 0))
            for row in rows
        ]

    def totals_by_condition(self) -> list[ConditionTotal]:
        with _store_errors(self.session):
            rows = (
                self.session.query(
                    Customer.condition.label("condition"),
                    func.sum(Invoice.total).label("total"),
                )
                .join(Invoice, Invoice.customer_id == Customer.id)
                .group_by(Customer.condition)
                .order_by(Customer.condition.asc())
                .all()
            )
        return [
            ConditionTotal(condition=row.condition, total=to_decimal(row.total))
            for row in rows
        ]

    def top_customers(self, limit: int) -> list[TopCustomer]:
        amount = func.coalesce(func.sum(Invoice.total), 0).label("amount")
        with _store_errors(self.session):
            rows = (
                self.session.query(
                    Customer.id.label("id"),
                    Customer.first_name.label("first_name"),
                    Customer.last_name.label("last_name"),
                    amount,
                )
                .outerjoin(Invoice, Invoice.customer_id == Customer.id)
                .group_by(Customer.id, Customer.first_name, Customer.last_name)
                .order_by(amount.desc(), Customer.id.asc())
                .limit(limit)
                .all()
            )
        return [
            TopCustomer(
                id=row.id,
                first_name=row.first_name,
                last_name=row.last_name,
                amount=to_decimal(row.amount),
            )
            for row in rows
        ]
