# Overview: Flask API routes for agent CRUD; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..errors import SalesError
from ..services import directory_service


agents_bp = Blueprint("agents", __name__, url_prefix="/api/agents")


@agents_bp.get("")
def list_agents_route():
    try:
        return jsonify(directory_service.list_agents()), 200
    except Exception:
        current_app.logger.exception("Failed to fetch agents")
        return jsonify({"error": "Failed to fetch agents"}), 500


@agents_bp.get("/<int:agent_id>")
def get_agent_route(agent_id: int):
    try:
        agent = directory_service.get_agent(agent_id)
        return jsonify(agent.to_dict()), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to fetch agent")
        return jsonify({"error": "Failed to fetch agent"}), 500


@agents_bp.post("")
def create_agent_route():
    data = request.get_json(silent=True) or {}
    try:
        agent = directory_service.create_agent(
            name=data.get("name"),
            phone_no=data.get("phone_no"),
            location=data.get("location"),
        )
        return jsonify(agent.to_dict()), 201
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to create agent")
        return jsonify({"error": "Failed to create agent"}), 500


@agents_bp.put("/<int:agent_id>")
def update_agent_route(agent_id: int):
    data = request.get_json(silent=True) or {}
    try:
        agent = directory_service.update_agent(
            agent_id,
            name=data.get("name"),
            phone_no=data.get("phone_no"),
            location=data.get("location"),
        )
        return jsonify(agent.to_dict()), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to update agent")
        return jsonify({"error": "Failed to update agent"}), 500


@agents_bp.delete("/<int:agent_id>")
def delete_agent_route(agent_id: int):
    try:
        directory_service.delete_agent(agent_id)
        return jsonify({"message": "Agent deleted successfully"}), 200
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to delete agent")
        return jsonify({"error": "Failed to delete agent"}), 500
