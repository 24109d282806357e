# Overview: Flask API routes for sales (invoice line items).

from flask import Blueprint, current_app, jsonify, request

from ..models import Sale
from ..repositories.errors import ReferentialViolation, StoreError
from ..services import sales_service
from ..validation import (
    ModelValidationPolicy,
    ValidationError,
    enforce_rules_sale,
    validate_payload,
)

SALE_POLICY = ModelValidationPolicy(
    writable_fields={"product_id", "invoice_id", "quantity"},
    required_on_create={"product_id", "invoice_id", "quantity"},
)

sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")


@sales_bp.get("")
def list_sales():
    try:
        sales = sales_service.list_sales()
    except StoreError:
        current_app.logger.exception("Failed to list sales")
        return jsonify({"error": "error getting sales"}), 500

    return jsonify({
        "message": "sales found",
        "data": [s.to_dict() for s in sales],
    }), 200


@sales_bp.post("")
def create_sale():
    """
    Add one line item. invoice_id and product_id must reference existing rows;
    the invoice total is not touched until the next recompute.
    """
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(model=Sale, payload=payload, policy=SALE_POLICY)
        enforce_rules_sale(patch)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        sale = sales_service.create_sale(patch=patch)
    except ReferentialViolation:
        return jsonify({"error": "invoice or product not found"}), 409
    except StoreError:
        current_app.logger.exception("Failed to create sale")
        return jsonify({"error": "error saving sale"}), 500

    return jsonify({"message": "sale created", "data": sale.to_dict()}), 201
