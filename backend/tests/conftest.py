"""
Pytest fixtures for retail_reports backend tests.

Provides test database setup, store/engine fixtures, JSON source files and
test client.
"""

import json
from decimal import Decimal

import pytest
from sqlalchemy import text

from retail_reports import create_app
from retail_reports.extensions import db
from retail_reports.models import Customer, Invoice, Product, Sale
from retail_reports.repositories import SQLAlchemyStore
from retail_reports.services.aggregation_service import AggregationEngine
from retail_reports.services.loader_service import LoaderConfig


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    # Clear all data but keep schema; restart autoincrement ids at 1
    db.session.expunge_all()
    meta = db.metadata
    for table in reversed(meta.sorted_tables):
        db.session.execute(table.delete())
    db.session.execute(text("DELETE FROM sqlite_sequence"))
    db.session.commit()

    yield db.session

    # Cleanup after test
    db.session.rollback()


@pytest.fixture(scope='function')
def store(db_session):
    return SQLAlchemyStore(db_session)


@pytest.fixture(scope='function')
def engine(store):
    return AggregationEngine(store)


def add_customer(store, first_name="John", last_name="Doe", condition=1) -> int:
    return store.customers.save(Customer(first_name=first_name, last_name=last_name, condition=condition))


def add_product(store, description="Product", price="10.00") -> int:
    return store.products.save(Product(description=description, price=Decimal(price)))


def add_invoice(store, customer_id, total="0.00", datetime="2022-05-15 00:00:00") -> int:
    return store.invoices.save(Invoice(customer_id=customer_id, total=Decimal(total), datetime=datetime))


def add_sale(store, product_id, invoice_id, quantity) -> int:
    return store.sales.save(Sale(product_id=product_id, invoice_id=invoice_id, quantity=quantity))


@pytest.fixture(scope='function')
def worked_example(store):
    """
    2 customers, 2 products (10.00, 5.00), 2 invoices with stale totals, 3 sales.

    Invoice 1: 10 x P1 + 10 x P2 = 150.00; invoice 2: 20 x P1 = 200.00.
    """
    john = add_customer(store, "John", "Doe", condition=1)
    jane = add_customer(store, "Jane", "Doe", condition=0)
    p1 = add_product(store, "Product 1", "10.00")
    p2 = add_product(store, "Product 2", "5.00")
    inv1 = add_invoice(store, john)
    inv2 = add_invoice(store, jane)
    add_sale(store, p1, inv1, 10)
    add_sale(store, p2, inv1, 10)
    add_sale(store, p1, inv2, 20)
    return {"customers": (john, jane), "products": (p1, p2), "invoices": (inv1, inv2)}


WORKED_SOURCES = {
    "customers": [
        {"id": 1, "first_name": "John", "last_name": "Doe", "condition": 1},
        {"id": 2, "first_name": "Jane", "last_name": "Doe", "condition": 0},
    ],
    "invoices": [
        {"id": 1, "datetime": "2022-05-15", "customer_id": 1, "total": 0.0},
        {"id": 2, "datetime": "2022-05-16", "customer_id": 2, "total": 0.0},
    ],
    "products": [
        {"id": 1, "description": "Product 1", "price": 10.0},
        {"id": 2, "description": "Product 2", "price": 5.0},
    ],
    "sales": [
        {"id": 1, "product_id": 1, "invoice_id": 1, "quantity": 10},
        {"id": 2, "product_id": 2, "invoice_id": 1, "quantity": 10},
        {"id": 3, "product_id": 1, "invoice_id": 2, "quantity": 20},
    ],
}


@pytest.fixture(scope='function')
def write_source(tmp_path):
    """Write a Python value as a JSON file and return its path."""
    def _write(name: str, value) -> str:
        path = tmp_path / f"{name}.json"
        path.write_text(json.dumps(value), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture(scope='function')
def worked_sources(write_source):
    return LoaderConfig(
        customer_path=write_source("customers", WORKED_SOURCES["customers"]),
        invoice_path=write_source("invoices", WORKED_SOURCES["invoices"]),
        product_path=write_source("products", WORKED_SOURCES["products"]),
        sale_path=write_source("sales", WORKED_SOURCES["sales"]),
    )
