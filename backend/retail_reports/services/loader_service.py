# Overview: Bulk import pipeline; streams JSON-array sources into the store in foreign-key order.

"""
Bulk Loader Invariants (authoritative)

- Each source is one JSON array of objects, decoded lazily with ijson.
- Records are saved one at a time, in source order, through the store.
- Loaders run in the fixed order customer, invoice, product, sale, never concurrently.
- Fail-fast: the first SourceReadError / StoreError aborts the run and is raised unmodified.
- No rollback: rows saved before a failure stay committed.
- Invoice.total is written as imported; recompute_invoice_totals makes it authoritative.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping

import ijson
from flask import current_app

from ..repositories.errors import SourceReadError
from ..repositories.protocols import EntityRepository, Store
from ..repositories.sqlalchemy_store import SQLAlchemyStore
from .import_schemas import SCHEMAS, BaseImportSchema


def iter_source_records(path: str, kind: str) -> Iterator[dict[str, Any]]:
    """Yield the objects of a JSON array file without materializing the array."""
    try:
        fh = open(path, "rb")
    except OSError as exc:
        raise SourceReadError(f"Cannot open {kind} source {path}: {exc}") from exc

    with fh:
        try:
            first = next(ijson.parse(fh), None)
            if first is None or first[1] != "start_array":
                raise SourceReadError(f"{kind} source {path} is not a JSON array")
            fh.seek(0)
            for position, record in enumerate(ijson.items(fh, "item"), start=1):
                if not isinstance(record, dict):
                    raise SourceReadError(
                        f"{kind} record {position} in {path} is not a JSON object"
                    )
                yield record
        except ijson.JSONError as exc:
            raise SourceReadError(f"Malformed {kind} source {path}: {exc}") from exc


class EntityLoader:
    """Reads one source and saves every record through one repository."""
    kind: str = ""

    def __init__(self, source_path: str, repository: EntityRepository, schema: BaseImportSchema | None = None):
        self.source_path = source_path
        self.repository = repository
        self.schema = schema or SCHEMAS[self.kind]

    def map_record(self, raw_row: dict[str, Any], position: int):
        try:
            normalized = self.schema.normalize_row(raw_row)
        except ValueError as exc:
            raise SourceReadError(f"{self.kind} record {position}: {exc}") from exc
        errors = self.schema.validate_row(normalized)
        if errors:
            raise SourceReadError(f"{self.kind} record {position}: {'; '.join(errors)}")
        return self.schema.build_entity(normalized)

    def load_and_save(self) -> int:
        saved = 0
        records = iter_source_records(self.source_path, self.kind)
        for position, raw_row in enumerate(records, start=1):
            entity = self.map_record(raw_row, position)
            self.repository.save(entity)
            saved += 1
        return saved


class CustomerLoader(EntityLoader):
    kind = "customer"


class InvoiceLoader(EntityLoader):
    kind = "invoice"


class ProductLoader(EntityLoader):
    kind = "product"


class SaleLoader(EntityLoader):
    kind = "sale"


@dataclass(frozen=True)
class LoaderConfig:
    customer_path: str
    invoice_path: str
    product_path: str
    sale_path: str

    @classmethod
    def from_app_config(cls, config: Mapping[str, Any]) -> "LoaderConfig":
        return cls(
            customer_path=config["CUSTOMER_PATH"],
            invoice_path=config["INVOICE_PATH"],
            product_path=config["PRODUCT_PATH"],
            sale_path=config["SALE_PATH"],
        )


class ImportPipeline:
    """Runs the four loaders in an order that satisfies every foreign key."""

    def __init__(self, config: LoaderConfig, store: Store):
        self.config = config
        self.loaders: list[EntityLoader] = [
            CustomerLoader(config.customer_path, store.customers),
            InvoiceLoader(config.invoice_path, store.invoices),
            ProductLoader(config.product_path, store.products),
            SaleLoader(config.sale_path, store.sales),
        ]

    def run(self) -> None:
        for loader in self.loaders:
            current_app.logger.info("Importing %s records from %s", loader.kind, loader.source_path)
            saved = loader.load_and_save()
            current_app.logger.info("Imported %d %s records", saved, loader.kind)


def run_import(config: LoaderConfig, store: Store | None = None) -> None:
    ImportPipeline(config, store if store is not None else SQLAlchemyStore()).run()
