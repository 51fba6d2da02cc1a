from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, approved_required, current_caller
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employee/punch-in", methods=["POST"], endpoint="employee_punch_in")
    @approved_required
    def employee_punch_in():
        caller = current_caller()
        punched_at = container.attendance_service.punch_in(**caller.context, user_id=caller.user_id)
        return jsonify({"success": True, "punchIn": punched_at.isoformat()})

    @app.route("/api/employee/punch-out", methods=["POST"], endpoint="employee_punch_out")
    @approved_required
    def employee_punch_out():
        caller = current_caller()
        punched_at, total_hours = container.attendance_service.punch_out(**caller.context, user_id=caller.user_id)
        return jsonify({"success": True, "punchOut": punched_at.isoformat(), "totalHours": total_hours})

    @app.route("/api/employee/attendance/today", methods=["GET"], endpoint="employee_attendance_today")
    @approved_required
    def employee_attendance_today():
        caller = current_caller()
        return jsonify(container.attendance_service.get_today_attendance(**caller.context, user_id=caller.user_id))

    @app.route("/api/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        return jsonify(container.attendance_service.get_today_overview(**current_caller().context))

    @app.route("/api/admin/attendance/today", methods=["GET"], endpoint="admin_attendance_today")
    @admin_required
    def admin_attendance_today():
        return jsonify(container.attendance_service.get_today_attendance_list(**current_caller().context))
