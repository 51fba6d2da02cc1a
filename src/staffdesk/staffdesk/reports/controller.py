from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, approved_required, current_caller, json_body, parse_int
from ..container import Container
from ..core.enums import TaskStatus
from ..core.exceptions import ValidationError


def _task_status(value) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        raise ValidationError("Invalid task status")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employee/reports", methods=["POST"], endpoint="employee_report_create")
    @approved_required
    def employee_report_create():
        caller = current_caller()
        data = json_body()
        task_id = data.get("taskId")

        report_id = container.report_service.submit_report(
            **caller.context,
            user_id=caller.user_id,
            summary=data.get("summary", ""),
            status=_task_status(data.get("status")),
            task_id=parse_int(task_id, "taskId") if task_id else None,
            task_title=data.get("taskTitle"),
        )
        return jsonify({"success": True, "reportId": str(report_id)}), 201

    @app.route("/api/admin/reports", methods=["GET"], endpoint="admin_reports")
    @admin_required
    def admin_reports():
        status = request.args.get("status")
        return jsonify(
            container.report_service.list_reports(
                **current_caller().context,
                search_name=request.args.get("search"),
                status=_task_status(status) if status and status != "all" else None,
            )
        )
