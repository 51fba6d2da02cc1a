from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, approved_required, current_caller, json_body, parse_date_value, parse_int
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _list_holidays():
        year = parse_int(request.args.get("year"), "year", minimum=1900, maximum=9999)
        month = request.args.get("month")
        return jsonify(
            container.holiday_service.list_holidays(
                **current_caller().context,
                year=year,
                month=parse_int(month, "month", minimum=1, maximum=12) if month else None,
            )
        )

    @app.route("/api/employee/holidays", methods=["GET"], endpoint="employee_holidays")
    @approved_required
    def employee_holidays():
        return _list_holidays()

    @app.route("/api/admin/holidays", methods=["GET"], endpoint="admin_holidays")
    @admin_required
    def admin_holidays():
        return _list_holidays()

    @app.route("/api/admin/holidays", methods=["POST"], endpoint="admin_holiday_create")
    @admin_required
    def admin_holiday_create():
        data = json_body()
        holiday_date = parse_date_value(data.get("date"), "date")
        if holiday_date is None:
            raise ValidationError("Date is required")

        holiday_id = container.holiday_service.mark_holiday(
            **current_caller().context,
            holiday_date=holiday_date,
            description=data.get("description"),
        )
        return jsonify({"success": True, "holidayId": str(holiday_id)}), 201
