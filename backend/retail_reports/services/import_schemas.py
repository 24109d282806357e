from __future__ import annotations

from decimal import Decimal
from typing import Any

from ..models import Customer, Invoice, Product, Sale
from ..money_utils import to_decimal
from ..validation import MAX_INT, MIN_INT


def _to_int(value: Any) -> int | None:
    """Strict integer coercion: fractions, booleans and out-of-range values raise ValueError."""
    if value is None or value == "":
        return None
    # bool is an int subclass; true/false is never a count or an id
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, (float, Decimal)):
        number = to_decimal(value)
        if not number.is_finite() or number != number.to_integral_value():
            raise ValueError(f"expected an integer, got {value!r}")
        value = int(number)
    elif not isinstance(value, int):
        text = str(value).strip()
        if not text:
            return None
        if not text.lstrip("-").isdigit():
            raise ValueError(f"expected an integer, got {value!r}")
        value = int(text)
    if not MIN_INT <= value <= MAX_INT:
        raise ValueError(f"integer out of range: {value}")
    return value


def _to_amount(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    amount = to_decimal(value)
    if not amount.is_finite():
        raise ValueError(f"expected a finite amount, got {value!r}")
    return amount


def _to_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


class BaseImportSchema:
    """
    Maps one source record to one model instance.

    Field renames and type coercion only: the source `id` is dropped because
    the store assigns identity on save.
    """
    kind: str = ""
    required_fields: tuple[str, ...] = ()

    def normalize_row(self, raw_row: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    def validate_row(self, normalized_row: dict[str, Any]) -> list[str]:
        return [
            f"{field} is required"
            for field in self.required_fields
            if normalized_row.get(field) is None
        ]

    def build_entity(self, normalized_row: dict[str, Any]):
        raise NotImplementedError


class CustomersSchema(BaseImportSchema):
    # {"id":1,"last_name":"Fifield","first_name":"Ike","condition":0}
    kind = "customer"
    required_fields = ("first_name", "last_name", "condition")

    def normalize_row(self, raw_row: dict[str, Any]) -> dict[str, Any]:
        return {
            "first_name": _to_text(raw_row.get("first_name")),
            "last_name": _to_text(raw_row.get("last_name")),
            "condition": _to_int(raw_row.get("condition")),
        }

    def build_entity(self, normalized_row: dict[str, Any]) -> Customer:
        return Customer(
            first_name=normalized_row["first_name"],
            last_name=normalized_row["last_name"],
            condition=normalized_row["condition"],
        )


class InvoicesSchema(BaseImportSchema):
    # {"id":1,"datetime":"2022-05-15","customer_id":19,"total":0.0}
    kind = "invoice"
    required_fields = ("datetime", "customer_id", "total")

    def normalize_row(self, raw_row: dict[str, Any]) -> dict[str, Any]:
        return {
            "datetime": _to_text(raw_row.get("datetime")),
            "customer_id": _to_int(raw_row.get("customer_id")),
            "total": _to_amount(raw_row.get("total")),
        }

    def build_entity(self, normalized_row: dict[str, Any]) -> Invoice:
        return Invoice(
            datetime=normalized_row["datetime"],
            customer_id=normalized_row["customer_id"],
            total=normalized_row["total"],
        )


class ProductsSchema(BaseImportSchema):
    # {"id":1,"description":"French Pastry - Mini Chocolate","price":97.01}
    kind = "product"
    required_fields = ("description", "price")

    def normalize_row(self, raw_row: dict[str, Any]) -> dict[str, Any]:
        return {
            "description": _to_text(raw_row.get("description")),
            "price": _to_amount(raw_row.get("price")),
        }

    def build_entity(self, normalized_row: dict[str, Any]) -> Product:
        return Product(
            description=normalized_row["description"],
            price=normalized_row["price"],
        )


class SalesSchema(BaseImportSchema):
    # {"id":1,"product_id":58,"invoice_id":45,"quantity":22}
    kind = "sale"
    required_fields = ("product_id", "invoice_id", "quantity")

    def normalize_row(self, raw_row: dict[str, Any]) -> dict[str, Any]:
        return {
            "product_id": _to_int(raw_row.get("product_id")),
            "invoice_id": _to_int(raw_row.get("invoice_id")),
            "quantity": _to_int(raw_row.get("quantity")),
        }

    def build_entity(self, normalized_row: dict[str, Any]) -> Sale:
        return Sale(
            product_id=normalized_row["product_id"],
            invoice_id=normalized_row["invoice_id"],
            quantity=normalized_row["quantity"],
        )


SCHEMAS: dict[str, BaseImportSchema] = {
    "customer": CustomersSchema(),
    "invoice": InvoicesSchema(),
    "product": ProductsSchema(),
    "sale": SalesSchema(),
}
