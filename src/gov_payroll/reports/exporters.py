from __future__ import annotations

import io
import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional, Sequence

import pandas as pd
import pdfkit
from jinja2 import Environment, FileSystemLoader, select_autoescape
from openpyxl.styles import Font

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import month_name, now_local
from ..core.constants import NO_POSITION_LABEL, REPORT_TITLE
from ..core.exceptions import ExportError
from ..salary.model import Salary

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

SALARY_SHEET = "Laporan Gaji"
SALARY_COLUMNS = [
    "No",
    "NIK",
    "Nama",
    "Jabatan",
    "Gaji Pokok",
    "Tunj. Jabatan",
    "Tunj. Transport",
    "Tunj. Makan",
    "Lembur",
    "Potongan",
    "Total Gaji",
    "Status",
]
# 1-based worksheet columns of the money fields (Gaji Pokok .. Total Gaji)
_MONEY_COLUMNS = range(5, 12)
_HEADER_ROW = 4

ATTENDANCE_SHEET = "Absensi"
ATTENDANCE_COLUMNS = ["Tanggal", "NIK", "Nama", "Jam Masuk", "Jam Keluar", "Status", "Keterangan"]
ATTENDANCE_EXPORT_FILENAME = "attendance_employees.xlsx"


def format_rupiah(value: Any) -> str:
    """3350000 -> 'Rp 3.350.000,00'"""
    amount = Decimal(str(value or 0))
    text = f"{abs(amount):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{'-' if amount < 0 else ''}Rp {text}"


def salary_report_filename(month: int, year: int) -> str:
    return f"Laporan_Gaji_{month_name(month)}_{year}.xlsx"


def salary_history_filename(employee_name: str) -> str:
    return f"Laporan_Gaji_{_slug(employee_name)}.pdf"


def attendance_sheet_filename(employee_name: str, month: int, year: int) -> str:
    return f"attendance_{_slug(employee_name)}_{month_name(month)}{year}.pdf"


def _slug(name: str) -> str:
    return "_".join((name or "").split())


def _salary_record(no: int, s: Salary) -> dict:
    c = s.components
    return {
        "No": no,
        "NIK": s.employee_nik or "",
        "Nama": s.employee_name or "",
        "Jabatan": s.position_name or NO_POSITION_LABEL,
        "Gaji Pokok": float(c.base_pay),
        "Tunj. Jabatan": float(c.position_allowance),
        "Tunj. Transport": float(c.transport_allowance),
        "Tunj. Makan": float(c.meal_allowance),
        "Lembur": float(c.overtime_amount),
        "Potongan": float(c.deductions),
        "Total Gaji": float(s.total),
        "Status": s.status.value,
    }


def salary_report_workbook(rows: Sequence[Salary], *, month: int, year: int) -> bytes:
    """Period salary report: title block, one row per salary and a TOTAL row."""
    df = pd.DataFrame([_salary_record(i, s) for i, s in enumerate(rows, start=1)], columns=SALARY_COLUMNS)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SALARY_SHEET, startrow=_HEADER_ROW - 1)
        ws = writer.sheets[SALARY_SHEET]

        ws["A1"] = REPORT_TITLE
        ws["A1"].font = Font(bold=True, size=14)
        ws["A2"] = f"Periode: {month_name(month)} {year}"

        total_row = _HEADER_ROW + len(df) + 1
        ws.cell(row=total_row, column=3, value="TOTAL").font = Font(bold=True)
        for col in _MONEY_COLUMNS:
            column_total = float(df[SALARY_COLUMNS[col - 1]].sum()) if len(df) else 0.0
            ws.cell(row=total_row, column=col, value=column_total).font = Font(bold=True)

        for col, header in enumerate(SALARY_COLUMNS, start=1):
            ws.cell(row=_HEADER_ROW, column=col).font = Font(bold=True)
            ws.column_dimensions[ws.cell(row=_HEADER_ROW, column=col).column_letter].width = max(10, len(header) + 4)

    output.seek(0)
    return output.getvalue()


def attendance_workbook(records: Sequence[AttendanceRecord]) -> bytes:
    df = pd.DataFrame(
        [
            {
                "Tanggal": r.work_date.isoformat(),
                "NIK": r.employee_nik or "",
                "Nama": r.employee_name or "",
                "Jam Masuk": r.time_in or "",
                "Jam Keluar": r.time_out or "",
                "Status": r.status.value,
                "Keterangan": r.note or "",
            }
            for r in records
        ],
        columns=ATTENDANCE_COLUMNS,
    )

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=ATTENDANCE_SHEET)
    output.seek(0)
    return output.getvalue()


class PdfRenderer:
    """HTML templates rendered with Jinja and converted by wkhtmltopdf (pdfkit)."""

    def __init__(self, *, wkhtmltopdf_path: Optional[str] = None):
        self._wkhtmltopdf_path = wkhtmltopdf_path
        self._env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
        )
        self._env.filters["rupiah"] = format_rupiah
        self._env.filters["month_name"] = month_name

    def _configuration(self):
        """pdfkit configuration, or None when wkhtmltopdf cannot be found.

        WKHTMLTOPDF_PATH wins when set; otherwise the binary is looked up on PATH.
        """
        try:
            if self._wkhtmltopdf_path:
                if os.path.isfile(self._wkhtmltopdf_path):
                    return pdfkit.configuration(wkhtmltopdf=self._wkhtmltopdf_path)
                return None
            return pdfkit.configuration()
        except OSError:
            return None

    def render_html(self, template_name: str, **context: Any) -> str:
        context.setdefault("title", REPORT_TITLE)
        context.setdefault("printed_at", now_local())
        return self._env.get_template(template_name).render(**context)

    def render(self, template_name: str, **context: Any) -> bytes:
        config = self._configuration()
        if config is None:
            raise ExportError("PDF export unavailable: wkhtmltopdf not found. Install it or set WKHTMLTOPDF_PATH.")
        html = self.render_html(template_name, **context)
        try:
            return pdfkit.from_string(html, False, configuration=config, options={"encoding": "UTF-8", "quiet": ""})
        except OSError as e:
            logger.error("wkhtmltopdf failed for %s: %s", template_name, e)
            raise ExportError("Failed to generate PDF") from e

    def salary_history(self, employee, rows: Sequence[Salary]) -> bytes:
        return self.render("salary_history.html", employee=employee, rows=rows)

    def attendance_sheet(self, sheet) -> bytes:
        return self.render("attendance_month.html", sheet=sheet)
