from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container
from ..core.enums import Role
from ..users.guards import login_required, role_required

_FIELDS = ("nik", "name", "email", "phone", "address", "position_id", "join_date", "status")


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    def _fields(data: dict) -> dict:
        return {k: data.get(k) for k in _FIELDS}

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @login_required
    def list_employees():
        return jsonify([e.to_dict() for e in service.list_employees()])

    @app.route("/api/employees/search", methods=["GET"], endpoint="employees_search")
    @login_required
    def search_employees():
        return jsonify([e.to_dict() for e in service.search(request.args.get("q"))])

    @app.route("/api/employees/status/<status>", methods=["GET"], endpoint="employees_by_status")
    @login_required
    def employees_by_status(status: str):
        return jsonify([e.to_dict() for e in service.list_by_status(status)])

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def get_employee(employee_id: int):
        return jsonify(service.get_employee(employee_id).to_dict())

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @role_required(Role.HR)
    def create_employee():
        employee = service.create_employee(**_fields(json_body()))
        return jsonify(employee.to_dict()), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @role_required(Role.HR)
    def update_employee(employee_id: int):
        employee = service.update_employee(employee_id, **_fields(json_body()))
        return jsonify(employee.to_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @role_required(Role.HR)
    def delete_employee(employee_id: int):
        service.delete_employee(employee_id)
        return jsonify({"message": "Employee deleted successfully"})
