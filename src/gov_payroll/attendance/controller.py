from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import PDF_MIMETYPE, XLSX_MIMETYPE, json_body, query_int, send_document
from ..container import Container
from ..core.enums import Role
from ..reports.exporters import ATTENDANCE_EXPORT_FILENAME, attendance_sheet_filename, attendance_workbook
from ..users.guards import login_required, role_required

_FIELDS = ("employee_id", "work_date", "time_in", "time_out", "status", "note")


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _fields(data: dict) -> dict:
        return {k: data.get(k) for k in _FIELDS}

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def list_attendance():
        return jsonify([r.to_dict() for r in service.list_records()])

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_get")
    @login_required
    def get_attendance(attendance_id: int):
        return jsonify(service.get_record(attendance_id).to_dict())

    @app.route("/api/attendance/employee/<int:employee_id>", methods=["GET"], endpoint="attendance_by_employee")
    @login_required
    def attendance_by_employee(employee_id: int):
        records = service.list_for_employee(
            employee_id,
            start_date=request.args.get("start_date"),
            end_date=request.args.get("end_date"),
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/recap/<int:employee_id>", methods=["GET"], endpoint="attendance_recap")
    @login_required
    def attendance_recap(employee_id: int):
        return jsonify(service.recap(employee_id, month=query_int("month"), year=query_int("year")))

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    @role_required(Role.HR)
    def create_attendance():
        record = service.record(**_fields(json_body()))
        return jsonify(record.to_dict()), 201

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="attendance_update")
    @role_required(Role.HR)
    def update_attendance(attendance_id: int):
        record = service.update_record(attendance_id, **_fields(json_body()))
        return jsonify(record.to_dict())

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @role_required(Role.HR)
    def delete_attendance(attendance_id: int):
        service.delete_record(attendance_id)
        return jsonify({"message": "Attendance deleted successfully"})

    @app.route("/api/attendance/export/excel", methods=["GET"], endpoint="attendance_export_excel")
    @role_required(Role.HR)
    def export_excel():
        return send_document(
            attendance_workbook(service.list_records()),
            filename=ATTENDANCE_EXPORT_FILENAME,
            mimetype=XLSX_MIMETYPE,
        )

    @app.route(
        "/api/attendance/export/employee/<int:employee_id>/pdf",
        methods=["GET"],
        endpoint="attendance_export_pdf",
    )
    @role_required(Role.HR)
    def export_pdf(employee_id: int):
        sheet = service.monthly_sheet(employee_id, month=query_int("month"), year=query_int("year"))
        return send_document(
            container.pdf_renderer.attendance_sheet(sheet),
            filename=attendance_sheet_filename(sheet.employee.name, sheet.month, sheet.year),
            mimetype=PDF_MIMETYPE,
        )
