from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.web import admin_required, approved_required, current_caller, month_and_year
from ..container import Container
from .model import AttendanceSummary

CSV_FIELDS = ["date", "status", "workType", "punchIn", "punchOut", "totalHours"]


def register(app: Flask, container: Container) -> None:
    def _admin_summary(user_id: int) -> AttendanceSummary:
        caller = current_caller()
        month, year = month_and_year(request.args)
        return container.monthly_attendance_service.compute_monthly_attendance(
            **caller.context,
            caller_id=caller.user_id,
            user_id=user_id,
            month=month,
            year=year,
        )

    def _write_summary_csv(summary: AttendanceSummary, *, filename: str):
        """Records first (newest first), then the month totals as key/value rows."""
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for record in summary.attendances:
            writer.writerow(record.to_dict())

        totals = csv.writer(out)
        totals.writerow([])
        for key in (
            "daysInMonth",
            "presentDays",
            "absentDays",
            "sundays",
            "holidays",
            "payableDays",
            "baseSalary",
            "calculatedSalary",
        ):
            totals.writerow([key, summary.to_dict()[key]])

        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/employee/attendance", methods=["GET"], endpoint="employee_attendance")
    @approved_required
    def employee_attendance():
        caller = current_caller()
        month, year = month_and_year(request.args)
        summary = container.monthly_attendance_service.get_my_attendance(
            **caller.context,
            user_id=caller.user_id,
            month=month,
            year=year,
        )
        return jsonify(summary.to_dict())

    @app.route("/api/admin/employees/<int:user_id>/attendance", methods=["GET"], endpoint="admin_employee_attendance")
    @admin_required
    def admin_employee_attendance(user_id: int):
        return jsonify(_admin_summary(user_id).to_dict())

    @app.route(
        "/api/admin/employees/<int:user_id>/attendance.csv",
        methods=["GET"],
        endpoint="admin_employee_attendance_csv",
    )
    @admin_required
    def admin_employee_attendance_csv(user_id: int):
        summary = _admin_summary(user_id)
        filename = f"attendance_{user_id}_{summary.year}-{summary.month:02d}.csv"
        return _write_summary_csv(summary, filename=filename)
