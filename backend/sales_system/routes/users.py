# Overview: Directory routes (agents, sales reps, suppliers, shops) used by the dashboards.

from flask import Blueprint, current_app, jsonify, request

from ..errors import SalesError
from ..services import directory_service


users_bp = Blueprint("users", __name__, url_prefix="/api/users")


@users_bp.get("/agents")
def list_agents_route():
    """Agent id/name pairs for pickers."""
    try:
        agents = directory_service.list_agents()
        return jsonify([{"agent_id": a["agent_id"], "name": a["name"]} for a in agents]), 200
    except Exception:
        current_app.logger.exception("Failed to fetch agents")
        return jsonify({"error": "Failed to fetch agents"}), 500


@users_bp.post("/agents")
def create_agent_route():
    data = request.get_json(silent=True) or {}
    try:
        agent = directory_service.create_agent(
            name=data.get("name"),
            phone_no=data.get("phone_number"),
            location=data.get("location"),
        )
        return jsonify(agent.to_dict()), 201
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to create agent")
        return jsonify({"error": "Failed to create agent"}), 500


@users_bp.get("/sales-reps")
def list_sales_reps_route():
    try:
        return jsonify(directory_service.list_sales_reps()), 200
    except Exception:
        current_app.logger.exception("Failed to fetch sales reps")
        return jsonify({"error": "Failed to fetch sales reps"}), 500


@users_bp.post("/sales-reps")
def create_sales_rep_route():
    data = request.get_json(silent=True) or {}
    try:
        rep = directory_service.create_sales_rep(
            name=data.get("name"),
            territory=data.get("territory"),
            phone_number=data.get("phone_number"),
        )
        return jsonify(rep.to_dict()), 201
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to create sales rep")
        return jsonify({"error": "Failed to create sales rep"}), 500


@users_bp.get("/suppliers")
def list_suppliers_route():
    try:
        return jsonify(directory_service.list_suppliers()), 200
    except Exception:
        current_app.logger.exception("Failed to fetch suppliers")
        return jsonify({"error": "Failed to fetch suppliers"}), 500


@users_bp.post("/suppliers")
def create_supplier_route():
    data = request.get_json(silent=True) or {}
    try:
        supplier = directory_service.create_supplier(name=data.get("name"))
        return jsonify(supplier.to_dict()), 201
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to create supplier")
        return jsonify({"error": "Failed to create supplier"}), 500


@users_bp.get("/shops")
def list_shops_route():
    try:
        return jsonify(directory_service.list_shops()), 200
    except Exception:
        current_app.logger.exception("Failed to fetch shops")
        return jsonify({"error": "Failed to fetch shops"}), 500


@users_bp.get("/shops/sales-rep/<int:sales_rep_id>")
def shops_for_sales_rep_route(sales_rep_id: int):
    try:
        return jsonify(directory_service.shops_for_sales_rep(sales_rep_id)), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to fetch shops for sales rep %s", sales_rep_id)
        return jsonify({"error": "Failed to fetch shops"}), 500


@users_bp.post("/shops")
def create_shop_route():
    data = request.get_json(silent=True) or {}
    try:
        shop = directory_service.create_shop(
            name=data.get("name"),
            address=data.get("address"),
            phone_number=data.get("phone_number"),
            sales_rep_id=data.get("sales_rep_id"),
        )
        return jsonify(shop.to_dict()), 201
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to create shop")
        return jsonify({"error": "Failed to create shop"}), 500
