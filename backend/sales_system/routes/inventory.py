# backend/sales_system/routes/inventory.py
"""
Inventory ledger routes.

- Reads join each (agent, product) record with product, agent and supplier names.
- Restock is additive: POSTing the same body twice adds the quantity twice.
"""
from flask import Blueprint, current_app, jsonify, request

from ..errors import SalesError
from ..services import inventory_service


inventory_bp = Blueprint("inventory", __name__, url_prefix="/api/inventory")


@inventory_bp.get("")
def list_inventory_route():
    try:
        return jsonify(inventory_service.list_inventory()), 200
    except Exception:
        current_app.logger.exception("Failed to fetch inventory")
        return jsonify({"error": "Failed to fetch inventory"}), 500


@inventory_bp.get("/agent/<int:agent_id>")
def agent_inventory_route(agent_id: int):
    try:
        return jsonify(inventory_service.list_agent_inventory(agent_id)), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to fetch inventory for agent %s", agent_id)
        return jsonify({"error": "Failed to fetch inventory"}), 500


@inventory_bp.get("/low/<threshold>")
def low_inventory_route(threshold: str):
    """Rows at or below threshold units."""
    try:
        return jsonify(inventory_service.low_inventory(threshold)), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to fetch low inventory products")
        return jsonify({"error": "Failed to fetch low inventory products"}), 500


@inventory_bp.post("/restock")
def restock_route():
    """
    Restock an agent's product.

    Body: {"agent_id": int, "product_id": int, "quantity": positive int}
    """
    data = request.get_json(silent=True) or {}

    if not data.get("agent_id") or not data.get("product_id"):
        return jsonify({"error": "Agent ID and Product ID are required"}), 400

    try:
        row = inventory_service.restock(
            agent_id=data.get("agent_id"),
            product_id=data.get("product_id"),
            quantity=data.get("quantity"),
        )
        return jsonify({
            "message": "Inventory restocked successfully",
            "inventory": row,
        }), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to restock inventory")
        return jsonify({"error": "Failed to restock inventory"}), 500
