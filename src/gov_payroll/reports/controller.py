from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import PDF_MIMETYPE, XLSX_MIMETYPE, send_document
from ..container import Container
from ..core.enums import Role
from ..users.guards import role_required
from .exporters import salary_history_filename, salary_report_filename, salary_report_workbook


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    @app.route("/api/reports/salaries", methods=["GET"], endpoint="reports_salaries")
    @role_required(Role.FINANCE)
    def salary_report():
        rows = service.salary_report(month=request.args.get("month"), year=request.args.get("year"))
        return jsonify([s.to_dict() for s in rows])

    @app.route("/api/reports/salaries/employee/<int:employee_id>", methods=["GET"], endpoint="reports_salary_history")
    @role_required(Role.FINANCE)
    def salary_history(employee_id: int):
        employee, rows = service.salary_history(employee_id)
        return jsonify({"employee": employee.to_dict(), "salaries": [s.to_dict() for s in rows]})

    @app.route("/api/reports/recap", methods=["GET"], endpoint="reports_recap")
    @role_required(Role.FINANCE)
    def recap():
        return jsonify(service.recap(month=request.args.get("month"), year=request.args.get("year")).to_dict())

    @app.route("/api/reports/export/excel", methods=["GET"], endpoint="reports_export_excel")
    @role_required(Role.FINANCE)
    def export_excel():
        month, year = service.period(request.args.get("month"), request.args.get("year"))
        rows = service.salary_report(month=month, year=year)
        return send_document(
            salary_report_workbook(rows, month=month, year=year),
            filename=salary_report_filename(month, year),
            mimetype=XLSX_MIMETYPE,
        )

    @app.route("/api/reports/export/employee/<int:employee_id>/pdf", methods=["GET"], endpoint="reports_export_pdf")
    @role_required(Role.FINANCE)
    def export_employee_pdf(employee_id: int):
        employee, rows = service.salary_history(employee_id)
        return send_document(
            container.pdf_renderer.salary_history(employee, rows),
            filename=salary_history_filename(employee.name),
            mimetype=PDF_MIMETYPE,
        )
