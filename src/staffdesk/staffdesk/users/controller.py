from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import admin_required, approved_required, current_caller, json_body, login_required
from ..container import Container
from ..core.enums import AccountStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = json_body()
        user_id = container.auth_service.register(
            email=data.get("email", ""),
            password=data.get("password", ""),
            name=data.get("name", ""),
            phone=data.get("phone"),
            address=data.get("address"),
            position=data.get("position"),
        )
        return jsonify({"success": True, "userId": str(user_id), "message": "Registered, awaiting admin approval"}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = True
        session["user_id"] = user.user_id
        session["name"] = user.name
        session["email"] = user.email
        session["role"] = user.role.value
        session["status"] = user.status.value
        return jsonify(
            {
                "success": True,
                "user": {
                    "_id": str(user.user_id),
                    "name": user.name,
                    "email": user.email,
                    "role": user.role.value,
                    "status": user.status.value,
                },
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    @login_required
    def auth_logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def auth_me():
        return jsonify(
            {
                "_id": str(session["user_id"]),
                "name": session.get("name"),
                "email": session.get("email"),
                "role": session.get("role"),
                "status": session.get("status"),
            }
        )

    @app.route("/api/auth/change-password", methods=["POST"], endpoint="auth_change_password")
    @approved_required
    def auth_change_password():
        caller = current_caller()
        data = json_body()
        container.auth_service.change_password(
            **caller.context,
            user_id=caller.user_id,
            current_password=data.get("currentPassword", ""),
            new_password=data.get("newPassword", ""),
        )
        return jsonify({"success": True})

    @app.route("/api/employee/profile", methods=["GET"], endpoint="employee_profile")
    @approved_required
    def employee_profile():
        caller = current_caller()
        return jsonify(container.user_service.get_profile(**caller.context, user_id=caller.user_id))

    @app.route("/api/employee/profile", methods=["PUT"], endpoint="employee_profile_update")
    @approved_required
    def employee_profile_update():
        caller = current_caller()
        data = json_body()
        container.user_service.update_profile(
            **caller.context,
            user_id=caller.user_id,
            name=data.get("name", ""),
            phone=data.get("phone"),
            address=data.get("address"),
            position=data.get("position"),
        )
        session["name"] = data.get("name", "").strip() or session.get("name")
        return jsonify({"success": True})

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def admin_employees():
        return jsonify(container.user_service.list_employees(**current_caller().context))

    @app.route("/api/admin/employees/pending", methods=["GET"], endpoint="admin_pending_employees")
    @admin_required
    def admin_pending_employees():
        return jsonify(container.user_service.list_pending_employees(**current_caller().context))

    @app.route("/api/admin/employees/<int:user_id>/status", methods=["PUT"], endpoint="admin_employee_status")
    @admin_required
    def admin_employee_status(user_id: int):
        data = json_body()
        try:
            status = AccountStatus(data.get("status"))
        except ValueError:
            raise ValidationError("Status must be approved or rejected")

        container.user_service.update_employee_status(**current_caller().context, user_id=user_id, status=status)
        return jsonify({"success": True})

    @app.route("/api/admin/employees/<int:user_id>/salary", methods=["PUT"], endpoint="admin_employee_salary")
    @admin_required
    def admin_employee_salary(user_id: int):
        data = json_body()
        if data.get("salary") is None:
            raise ValidationError("Salary is required")
        container.user_service.update_salary(**current_caller().context, user_id=user_id, salary=data["salary"])
        return jsonify({"success": True})
