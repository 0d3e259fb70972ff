# Overview: Flask API routes for the product catalog; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..errors import SalesError
from ..services import products_service, reporting_service


products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
def list_products_route():
    try:
        return jsonify(products_service.list_products()), 200
    except Exception:
        current_app.logger.exception("Failed to fetch products")
        return jsonify({"error": "Failed to fetch products"}), 500


@products_bp.get("/supplier/<int:supplier_id>")
def supplier_products_route(supplier_id: int):
    try:
        return jsonify(products_service.products_for_supplier(supplier_id)), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to fetch products for supplier %s", supplier_id)
        return jsonify({"error": "Failed to fetch products"}), 500


@products_bp.get("/analysis")
def product_analysis_route():
    """
    Sales analysis per product.

    Query params:
    - supplier_id: int (optional) - restrict to one supplier's catalog
    """
    try:
        rows = reporting_service.product_sales_analysis(request.args.get("supplier_id"))
        return jsonify(rows), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to fetch product sales analysis")
        return jsonify({"error": "Failed to fetch product sales analysis"}), 500


@products_bp.get("/price-history")
def price_history_route():
    try:
        return jsonify(products_service.price_history()), 200
    except Exception:
        current_app.logger.exception("Failed to fetch price history")
        return jsonify({"error": "Failed to fetch price history"}), 500


@products_bp.post("")
def create_product_route():
    """
    Create a product and seed every agent with initial_quantity units (default 100).
    """
    data = request.get_json(silent=True) or {}

    if not data.get("supplier_id") or not data.get("name") or not data.get("price"):
        return jsonify({"error": "Supplier ID, name, and price are required"}), 400

    initial_quantity = data.get("initial_quantity", current_app.config["DEFAULT_INITIAL_QUANTITY"])

    try:
        product, seeded = products_service.create_product(
            supplier_id=data.get("supplier_id"),
            name=data.get("name"),
            description=data.get("description"),
            price=data.get("price"),
            initial_quantity=initial_quantity,
        )
        body = product.to_dict()
        body["agents_seeded"] = seeded
        body["message"] = f"Product created with initial inventory of {initial_quantity} units for {seeded} agents"
        return jsonify(body), 201
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to create product")
        return jsonify({"error": "Failed to create product"}), 500


@products_bp.put("/<int:product_id>")
def update_product_route(product_id: int):
    data = request.get_json(silent=True) or {}

    if not data.get("name") or not data.get("price"):
        return jsonify({"error": "Name and price are required"}), 400

    try:
        product = products_service.update_product(
            product_id,
            name=data.get("name"),
            description=data.get("description"),
            price=data.get("price"),
        )
        return jsonify(product.to_dict()), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to update product")
        return jsonify({"error": "Failed to update product"}), 500
