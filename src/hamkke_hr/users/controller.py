from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role, current_user_id, json_body, login_required
from ..container import Container
from .model import Employee


def _employee_to_dict(e: Employee) -> dict:
    return {
        "user_id": e.user_id,
        "name": e.display_name,
        "email": e.email,
        "department": e.department,
        "position": e.position,
        "role": e.role.value,
        "hire_date": e.hire_date.isoformat() if e.hire_date else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(_employee_to_dict(container.employee_service.get_profile(current_user_id())))

    @app.route("/api/admin/employees", methods=["GET"], endpoint="employees")
    @admin_required
    def employees():
        found = container.employee_service.roster(search=request.args.get("search", ""))
        return jsonify({"employees": [_employee_to_dict(e) for e in found]})

    @app.route("/api/admin/employees/<int:user_id>/role", methods=["PUT"], endpoint="change_role")
    @admin_required
    def change_role(user_id: int):
        new_role = json_body().get("role")
        container.employee_service.change_role(current_role=current_role(), user_id=user_id, new_role=new_role)
        return jsonify({"user_id": user_id, "role": new_role})

    @app.route("/api/admin/employees/<int:user_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    def delete_employee(user_id: int):
        container.employee_service.delete_employee(
            current_role=current_role(),
            user_id=user_id,
            acting_user_id=current_user_id(),
        )
        return jsonify({"user_id": user_id, "deleted": True})
