# backend/retail_reports/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/retail_reports.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///retail_reports.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bulk import sources (JSON arrays), used by `flask imports run`
    CUSTOMER_PATH = os.environ.get("CUSTOMER_PATH", "docs/customers.json")
    INVOICE_PATH = os.environ.get("INVOICE_PATH", "docs/invoices.json")
    PRODUCT_PATH = os.environ.get("PRODUCT_PATH", "docs/products.json")
    SALE_PATH = os.environ.get("SALE_PATH", "docs/sales.json")

    # Default ranking sizes for the report endpoints
    TOP_PRODUCTS_LIMIT = int(os.environ.get("TOP_PRODUCTS_LIMIT", "5"))
    TOP_CUSTOMERS_LIMIT = int(os.environ.get("TOP_CUSTOMERS_LIMIT", "5"))
