# Overview: Flask API routes for customers; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..models import Customer
from ..money_utils import to_money
from ..repositories.errors import StoreError
from ..services import customers_service
from ..services.aggregation_service import ReportError, default_engine, parse_limit
from ..validation import ModelValidationPolicy, ValidationError, validate_payload

CUSTOMER_POLICY = ModelValidationPolicy(
    writable_fields={"first_name", "last_name", "condition"},
    required_on_create={"first_name", "last_name"},
)

customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
def list_customers():
    try:
        customers = customers_service.list_customers()
    except StoreError:
        current_app.logger.exception("Failed to list customers")
        return jsonify({"error": "error getting customers"}), 500

    return jsonify({
        "message": "customers found",
        "data": [c.to_dict() for c in customers],
    }), 200


@customers_bp.post("")
def create_customer():
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(model=Customer, payload=payload, policy=CUSTOMER_POLICY)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        customer = customers_service.create_customer(patch=patch)
    except StoreError:
        current_app.logger.exception("Failed to create customer")
        return jsonify({"error": "error saving customer"}), 500

    return jsonify({"message": "customer created", "data": customer.to_dict()}), 201


@customers_bp.get("/top")
def top_customers():
    """
    Customers ranked by the sum of their invoice totals.

    Query params:
    - limit: int (optional) - number of customers (default TOP_CUSTOMERS_LIMIT)
    """
    try:
        limit = parse_limit(request.args.get("limit"), current_app.config["TOP_CUSTOMERS_LIMIT"])
        rows = default_engine().top_customers(limit=limit)
    except ReportError as e:
        return jsonify({"error": str(e)}), 400
    except StoreError:
        current_app.logger.exception("Failed to rank customers")
        return jsonify({"error": "internal server error"}), 500

    return jsonify({
        "data": [
            {
                "id": row.id,
                "first_name": row.first_name,
                "last_name": row.last_name,
                "amount": to_money(row.amount),
            }
            for row in rows
        ]
    }), 200
