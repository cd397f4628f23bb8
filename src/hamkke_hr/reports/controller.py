from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.datetime_utils import today_local
from ..common.web import admin_required, current_role, current_user_id, login_required, window_args
from ..container import Container
from .export import attendance_matrix_csv, work_hours_csv


def _csv_response(payload: bytes, filename: str) -> Response:
    return Response(
        payload,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        stats = container.dashboard_service.stats(user_id=current_user_id(), role=current_role())
        return jsonify(stats.to_dict())

    @app.route("/api/admin/attendance-matrix", methods=["GET"], endpoint="attendance_matrix")
    @admin_required
    def attendance_matrix():
        matrix = container.report_service.build_attendance_matrix(search=request.args.get("search", ""), **window_args())
        return jsonify({"dates": matrix.dates, "rows": matrix.rows})

    @app.route("/api/admin/attendance-matrix.csv", methods=["GET"], endpoint="attendance_matrix_csv")
    @admin_required
    def attendance_matrix_export():
        matrix = container.report_service.build_attendance_matrix(search=request.args.get("search", ""), **window_args())
        return _csv_response(attendance_matrix_csv(matrix), f"attendance_{today_local():%Y%m%d}.csv")

    @app.route("/api/admin/work-hours", methods=["GET"], endpoint="work_hours")
    @admin_required
    def work_hours():
        matrix = container.report_service.build_work_hours_matrix(search=request.args.get("search", ""), **window_args())
        return jsonify({"dates": matrix.dates, "rows": matrix.rows})

    @app.route("/api/admin/work-hours.csv", methods=["GET"], endpoint="work_hours_csv")
    @admin_required
    def work_hours_export():
        matrix = container.report_service.build_work_hours_matrix(search=request.args.get("search", ""), **window_args())
        return _csv_response(work_hours_csv(matrix), f"work_hours_{today_local():%Y%m%d}.csv")

    @app.route("/api/admin/work-hours/<int:user_id>", methods=["GET"], endpoint="work_hours_detail")
    @admin_required
    def work_hours_detail(user_id: int):
        employee = container.employee_service.get_profile(user_id)
        detail = container.report_service.build_employee_detail(user_id, **window_args())
        return jsonify({"user_id": employee.user_id, "name": employee.display_name, "days": detail})
