from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, approved_required, current_caller, json_body, parse_date_value
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/tasks", methods=["GET"], endpoint="admin_tasks")
    @admin_required
    def admin_tasks():
        return jsonify(
            container.task_service.list_tasks(
                **current_caller().context,
                status=request.args.get("status"),
                start_date=parse_date_value(request.args.get("startDate"), "startDate"),
                end_date=parse_date_value(request.args.get("endDate"), "endDate"),
            )
        )

    @app.route("/api/admin/tasks", methods=["POST"], endpoint="admin_task_create")
    @admin_required
    def admin_task_create():
        caller = current_caller()
        data = json_body()
        assigned_to = data.get("assignedTo") or []
        if not isinstance(assigned_to, list):
            raise ValidationError("assignedTo must be a list of user ids")
        try:
            assigned_ids = [int(u) for u in assigned_to]
        except (TypeError, ValueError):
            raise ValidationError("assignedTo must be a list of user ids")

        task_id = container.task_service.create_task(
            **caller.context,
            admin_user_id=caller.user_id,
            title=data.get("title", ""),
            description=data.get("description", ""),
            assigned_to=assigned_ids,
        )
        return jsonify({"success": True, "taskId": str(task_id)}), 201

    @app.route("/api/employee/tasks", methods=["GET"], endpoint="employee_tasks")
    @approved_required
    def employee_tasks():
        caller = current_caller()
        return jsonify(container.task_service.get_my_tasks(**caller.context, user_id=caller.user_id))
