from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from ..core.enums import Role
from ..users.guards import login_required, role_required


def register(app: Flask, container: Container) -> None:
    service = container.position_service

    @app.route("/api/positions", methods=["GET"], endpoint="positions_list")
    @login_required
    def list_positions():
        return jsonify([p.to_dict() for p in service.list_positions()])

    @app.route("/api/positions/<int:position_id>", methods=["GET"], endpoint="positions_get")
    @login_required
    def get_position(position_id: int):
        return jsonify(service.get_position(position_id).to_dict())

    @app.route("/api/positions", methods=["POST"], endpoint="positions_create")
    @role_required(Role.HR)
    def create_position():
        data = json_body()
        position = service.create_position(
            name=data.get("name"),
            base_pay=data.get("base_pay"),
            position_allowance=data.get("position_allowance"),
            overtime_rate=data.get("overtime_rate"),
        )
        return jsonify(position.to_dict()), 201

    @app.route("/api/positions/<int:position_id>", methods=["PUT"], endpoint="positions_update")
    @role_required(Role.HR)
    def update_position(position_id: int):
        data = json_body()
        position = service.update_position(
            position_id,
            name=data.get("name"),
            base_pay=data.get("base_pay"),
            position_allowance=data.get("position_allowance"),
            overtime_rate=data.get("overtime_rate"),
        )
        return jsonify(position.to_dict())

    @app.route("/api/positions/<int:position_id>", methods=["DELETE"], endpoint="positions_delete")
    @role_required(Role.HR)
    def delete_position(position_id: int):
        service.delete_position(position_id)
        return jsonify({"message": "Position deleted successfully"})
