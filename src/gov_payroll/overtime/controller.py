from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container
from ..core.enums import Role
from ..users.guards import login_required, role_required


def register(app: Flask, container: Container) -> None:
    service = container.overtime_service

    @app.route("/api/overtime", methods=["GET"], endpoint="overtime_list")
    @login_required
    def list_overtime():
        return jsonify([o.to_dict() for o in service.list_entries()])

    @app.route("/api/overtime/period", methods=["GET"], endpoint="overtime_period")
    @login_required
    def overtime_by_period():
        entries = service.list_for_period(month=request.args.get("month"), year=request.args.get("year"))
        return jsonify([o.to_dict() for o in entries])

    @app.route("/api/overtime/<int:overtime_id>", methods=["GET"], endpoint="overtime_get")
    @login_required
    def get_overtime(overtime_id: int):
        return jsonify(service.get_entry(overtime_id).to_dict())

    @app.route("/api/overtime/employee/<int:employee_id>", methods=["GET"], endpoint="overtime_by_employee")
    @login_required
    def overtime_by_employee(employee_id: int):
        return jsonify([o.to_dict() for o in service.list_for_employee(employee_id)])

    @app.route("/api/overtime", methods=["POST"], endpoint="overtime_create")
    @role_required(Role.HR)
    def create_overtime():
        data = json_body()
        entry = service.create_entry(
            employee_id=data.get("employee_id"),
            work_date=data.get("work_date"),
            total_hours=data.get("total_hours"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            description=data.get("description"),
        )
        return jsonify(entry.to_dict()), 201

    @app.route("/api/overtime/<int:overtime_id>", methods=["PUT"], endpoint="overtime_update")
    @role_required(Role.HR)
    def update_overtime(overtime_id: int):
        data = json_body()
        entry = service.update_entry(
            overtime_id,
            work_date=data.get("work_date"),
            total_hours=data.get("total_hours"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            description=data.get("description"),
            status=data.get("status"),
        )
        return jsonify(entry.to_dict())

    @app.route("/api/overtime/<int:overtime_id>", methods=["DELETE"], endpoint="overtime_delete")
    @role_required(Role.HR)
    def delete_overtime(overtime_id: int):
        service.delete_entry(overtime_id)
        return jsonify({"message": "Overtime deleted successfully"})

    @app.route("/api/overtime/<int:overtime_id>/approve", methods=["PATCH"], endpoint="overtime_approve")
    @role_required(Role.HR)
    def approve_overtime(overtime_id: int):
        data = json_body()
        entry = service.decide(overtime_id, status=data.get("status"), approver_id=data.get("approver_id"))
        return jsonify({"message": "Overtime status updated successfully", "overtime": entry.to_dict()})

    @app.route("/api/overtime/recalculate-rates", methods=["POST"], endpoint="overtime_recalculate_rates")
    @role_required(Role.ADMIN)
    def recalculate_rates():
        result = service.recalculate_rates()
        app.logger.info("Overtime rate backfill: %s of %s rows updated", result.updated, result.total)
        return jsonify({"message": "Recalculation completed", "updated": result.updated, "total": result.total})
