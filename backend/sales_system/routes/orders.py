# Overview: Flask API routes for orders; parses input and returns JSON responses.

# backend/sales_system/routes/orders.py
"""
Order routes.

POST /api/orders answers with {"orderId": id} on success and {"error": reason}
on failure, so clients can branch on "orderId" in the body.
"""

from flask import Blueprint, current_app, jsonify, request

from ..errors import InvalidArgument, SalesError
from ..services import order_service, summary_service


orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")

REQUIRED_ORDER_FIELDS = (
    "agentId",
    "shopId",
    "salesRepId",
    "paymentMethod",
    "paymentAmount",
    "productIds",
    "quantities",
    "prices",
)


@orders_bp.get("/summary")
def order_summary_route():
    try:
        return jsonify(summary_service.order_summaries()), 200
    except Exception:
        current_app.logger.exception("Failed to fetch order summaries")
        return jsonify({"error": "Failed to fetch order summaries"}), 500


@orders_bp.get("/agent/<int:agent_id>")
def orders_for_agent_route(agent_id: int):
    try:
        return jsonify(order_service.orders_for_agent(agent_id)), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to fetch orders for agent %s", agent_id)
        return jsonify({"error": "Failed to fetch orders"}), 500


@orders_bp.get("/sales-rep/<int:sales_rep_id>")
def orders_for_sales_rep_route(sales_rep_id: int):
    try:
        return jsonify(order_service.orders_for_sales_rep(sales_rep_id)), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to fetch orders for sales rep %s", sales_rep_id)
        return jsonify({"error": "Failed to fetch orders"}), 500


@orders_bp.get("/<int:order_id>/items")
def order_items_route(order_id: int):
    try:
        return jsonify(order_service.order_items(order_id)), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to fetch order items")
        return jsonify({"error": "Failed to fetch order items"}), 500


@orders_bp.post("")
def create_order_route():
    """
    Place an order.

    Body: agentId, shopId, salesRepId, paymentMethod, paymentAmount,
    productIds[], quantities[], prices[] (equal length), orderStatus (optional).
    """
    data = request.get_json(silent=True) or {}

    missing = [field for field in REQUIRED_ORDER_FIELDS if data.get(field) in (None, "")]
    if missing:
        return jsonify({"error": "Missing required fields", "details": {"missing": missing}}), 400

    try:
        lines = order_service.lines_from_arrays(
            data["productIds"], data["quantities"], data["prices"]
        )
    except InvalidArgument as e:
        return jsonify(e.to_dict()), e.status_code

    try:
        result = order_service.submit_order(
            agent_id=data["agentId"],
            shop_id=data["shopId"],
            sales_rep_id=data["salesRepId"],
            payment_method=data["paymentMethod"],
            payment_amount=data["paymentAmount"],
            lines=lines,
            status=data.get("orderStatus") or None,
        )
        return jsonify(result.to_dict()), result.status_code
    except Exception:
        current_app.logger.exception("Failed to create order")
        return jsonify({"error": "Failed to create order"}), 500


@orders_bp.patch("/<int:order_id>/status")
def update_order_status_route(order_id: int):
    data = request.get_json(silent=True) or {}
    try:
        order = order_service.update_order_status(order_id, data.get("status"))
        return jsonify(order.to_dict()), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to update order status")
        return jsonify({"error": "Failed to update order status"}), 500
