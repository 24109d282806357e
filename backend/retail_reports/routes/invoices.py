# Overview: Flask API routes for invoices and invoice-total maintenance.

from flask import Blueprint, current_app, jsonify, request

from ..models import Invoice
from ..money_utils import to_money
from ..repositories.errors import ReferentialViolation, StoreError
from ..services import invoices_service
from ..services.aggregation_service import default_engine
from ..validation import (
    ModelValidationPolicy,
    ValidationError,
    enforce_rules_invoice,
    validate_payload,
)

INVOICE_POLICY = ModelValidationPolicy(
    writable_fields={"datetime", "total", "customer_id"},
    required_on_create={"datetime", "customer_id"},
)

invoices_bp = Blueprint("invoices", __name__, url_prefix="/api/invoices")


@invoices_bp.get("")
def list_invoices():
    try:
        invoices = invoices_service.list_invoices()
    except StoreError:
        current_app.logger.exception("Failed to list invoices")
        return jsonify({"error": "error getting invoices"}), 500

    return jsonify({
        "message": "invoices found",
        "data": [i.to_dict() for i in invoices],
    }), 200


@invoices_bp.post("")
def create_invoice():
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(model=Invoice, payload=payload, policy=INVOICE_POLICY)
        enforce_rules_invoice(patch)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        invoice = invoices_service.create_invoice(patch=patch)
    except ReferentialViolation:
        return jsonify({"error": "customer not found"}), 409
    except StoreError:
        current_app.logger.exception("Failed to create invoice")
        return jsonify({"error": "error saving invoice"}), 500

    return jsonify({"message": "invoice created", "data": invoice.to_dict()}), 201


@invoices_bp.post("/totals/recompute")
def recompute_totals():
    """Recompute every invoice total from its sales (full pass, idempotent)."""
    try:
        default_engine().recompute_invoice_totals()
    except StoreError:
        current_app.logger.exception("Failed to recompute invoice totals")
        return jsonify({"error": "internal server error"}), 500

    return jsonify({"message": "invoices total updated"}), 200


@invoices_bp.get("/totals/condition")
def totals_by_condition():
    try:
        rows = default_engine().invoice_totals_by_customer_condition()
    except StoreError:
        current_app.logger.exception("Failed to total invoices by condition")
        return jsonify({"error": "internal server error"}), 500

    return jsonify({
        "data": [
            {"condition": row.condition, "total": to_money(row.total)}
            for row in rows
        ]
    }), 200
