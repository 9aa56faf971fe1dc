from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container
from ..core.enums import Role
from ..users.guards import current_user, login_required, role_required

_AMOUNT_FIELDS = (
    "base_pay",
    "position_allowance",
    "transport_allowance",
    "meal_allowance",
    "overtime_amount",
    "deductions",
)


def register(app: Flask, container: Container) -> None:
    service = container.salary_service

    @app.route("/api/salaries", methods=["GET"], endpoint="salaries_list")
    @role_required(Role.FINANCE)
    def list_salaries():
        return jsonify([s.to_dict() for s in service.list_salaries()])

    @app.route("/api/salaries/period", methods=["GET"], endpoint="salaries_period")
    @role_required(Role.FINANCE)
    def salaries_by_period():
        salaries = service.list_for_period(month=request.args.get("month"), year=request.args.get("year"))
        return jsonify([s.to_dict() for s in salaries])

    @app.route("/api/salaries/my-slips", methods=["GET"], endpoint="salaries_my_slips")
    @login_required
    def my_slips():
        slips = service.my_slips(current_user(), month=request.args.get("month"), year=request.args.get("year"))
        return jsonify([s.to_dict() for s in slips])

    @app.route("/api/salaries/slip/<int:salary_id>", methods=["GET"], endpoint="salaries_slip")
    @login_required
    def slip(salary_id: int):
        return jsonify(service.get_slip(current_user(), salary_id).to_dict())

    @app.route("/api/salaries/<int:salary_id>", methods=["GET"], endpoint="salaries_get")
    @role_required(Role.FINANCE)
    def get_salary(salary_id: int):
        return jsonify(service.get_salary(salary_id).to_dict())

    @app.route("/api/salaries/employee/<int:employee_id>", methods=["GET"], endpoint="salaries_by_employee")
    @role_required(Role.FINANCE)
    def salaries_by_employee(employee_id: int):
        return jsonify([s.to_dict() for s in service.list_for_employee(employee_id)])

    @app.route("/api/salaries", methods=["POST"], endpoint="salaries_create")
    @role_required(Role.FINANCE)
    def create_salary():
        data = json_body()
        salary = service.create_salary(
            employee_id=data.get("employee_id"),
            month=data.get("month"),
            year=data.get("year"),
            **{k: data.get(k) for k in _AMOUNT_FIELDS},
        )
        return jsonify(salary.to_dict()), 201

    @app.route("/api/salaries/generate-batch", methods=["POST"], endpoint="salaries_generate_batch")
    @role_required(Role.FINANCE)
    def generate_batch():
        data = json_body()
        result = service.generate_batch(
            month=data.get("month"),
            year=data.get("year"),
            transport_allowance=data.get("transport_allowance"),
            meal_allowance=data.get("meal_allowance"),
        )
        return jsonify(result.to_dict()), 201

    @app.route("/api/salaries/<int:salary_id>", methods=["PUT"], endpoint="salaries_update")
    @role_required(Role.FINANCE)
    def update_salary(salary_id: int):
        data = json_body()
        fields = {k: data.get(k) for k in ("employee_id", "month", "year", "status", *_AMOUNT_FIELDS)}
        return jsonify(service.update_salary(salary_id, **fields).to_dict())

    @app.route("/api/salaries/<int:salary_id>/status", methods=["PATCH"], endpoint="salaries_status")
    @role_required(Role.FINANCE)
    def update_status(salary_id: int):
        data = json_body()
        salary = service.set_status(salary_id, data.get("status"))
        return jsonify({"message": "Status updated successfully", "salary": salary.to_dict()})

    @app.route("/api/salaries/<int:salary_id>", methods=["DELETE"], endpoint="salaries_delete")
    @role_required(Role.FINANCE)
    def delete_salary(salary_id: int):
        service.delete_salary(salary_id)
        return jsonify({"message": "Salary deleted successfully"})
