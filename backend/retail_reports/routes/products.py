# Overview: Flask API routes for products; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..models import Product
from ..repositories.errors import StoreError
from ..services import products_service
from ..services.aggregation_service import ReportError, default_engine, parse_limit
from ..validation import (
    ModelValidationPolicy,
    ValidationError,
    enforce_rules_product,
    validate_payload,
)

PRODUCT_POLICY = ModelValidationPolicy(
    writable_fields={"description", "price"},
    required_on_create={"description", "price"},
)

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
def list_products():
    try:
        products = products_service.list_products()
    except StoreError:
        current_app.logger.exception("Failed to list products")
        return jsonify({"error": "error getting products"}), 500

    return jsonify({
        "message": "products found",
        "data": [p.to_dict() for p in products],
    }), 200


@products_bp.post("")
def create_product():
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY)
        enforce_rules_product(patch)  # Handles price validation including max check
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        product = products_service.create_product(patch=patch)
    except StoreError:
        current_app.logger.exception("Failed to create product")
        return jsonify({"error": "error saving product"}), 500

    return jsonify({"message": "product created", "data": product.to_dict()}), 201


@products_bp.get("/top")
def top_products():
    """
    Best-selling products by units sold.

    Query params:
    - limit: int (optional) - number of products (default TOP_PRODUCTS_LIMIT)

    NOTE: "total" in each row is a unit count, not an amount.
    """
    try:
        limit = parse_limit(request.args.get("limit"), current_app.config["TOP_PRODUCTS_LIMIT"])
        rows = default_engine().top_products(limit=limit)
    except ReportError as e:
        return jsonify({"error": str(e)}), 400
    except StoreError:
        current_app.logger.exception("Failed to rank products")
        return jsonify({"error": "internal server error"}), 500

    return jsonify({
        "data": [
            {"id": row.id, "description": row.description, "total": row.total}
            for row in rows
        ]
    }), 200
