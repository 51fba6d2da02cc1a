from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, approved_required, current_caller, json_body, parse_date_value
from ..container import Container
from ..core.enums import RequestCategory, RequestStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employee/requests", methods=["GET"], endpoint="employee_requests")
    @approved_required
    def employee_requests():
        caller = current_caller()
        return jsonify(container.request_service.list_my_requests(**caller.context, user_id=caller.user_id))

    @app.route("/api/employee/requests", methods=["POST"], endpoint="employee_request_create")
    @approved_required
    def employee_request_create():
        caller = current_caller()
        data = json_body()
        try:
            category = RequestCategory(data.get("category"))
        except ValueError:
            raise ValidationError("Category must be leave, wfh, query or complaint")

        request_id = container.request_service.create_request(
            **caller.context,
            user_id=caller.user_id,
            category=category,
            message=data.get("message", ""),
            from_date=parse_date_value(data.get("fromDate"), "fromDate"),
            to_date=parse_date_value(data.get("toDate"), "toDate"),
        )
        return jsonify({"success": True, "requestId": str(request_id)}), 201

    @app.route("/api/admin/requests", methods=["GET"], endpoint="admin_requests")
    @admin_required
    def admin_requests():
        return jsonify(container.request_service.list_requests(**current_caller().context))

    @app.route("/api/admin/requests/<int:request_id>", methods=["PUT"], endpoint="admin_request_update")
    @admin_required
    def admin_request_update(request_id: int):
        data = json_body()
        try:
            status = RequestStatus(data.get("status"))
        except ValueError:
            raise ValidationError("Status must be approved, rejected or replied")

        container.request_service.update_request_status(
            **current_caller().context,
            request_id=request_id,
            status=status,
            admin_reply=data.get("adminReply", ""),
        )
        return jsonify({"success": True})
