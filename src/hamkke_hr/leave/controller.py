from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.web import admin_required, current_role, current_user_id, json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import LeaveRequest
from .service import balance_to_dict


def _request_to_dict(req: LeaveRequest) -> dict:
    return {
        "id": req.request_id,
        "user_id": req.user_id,
        "name": req.employee_name,
        "start_date": req.start_date.isoformat(),
        "end_date": req.end_date.isoformat(),
        "days": req.days,
        "status": req.status.value,
        "reason": req.reason,
        "requested_at": req.requested_at.isoformat() if req.requested_at else None,
        "approved_at": req.approved_at.isoformat() if req.approved_at else None,
        "approved_by": req.approved_by,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        data = json_body()
        request_id = container.leave_service.submit_request(
            user_id=current_user_id(),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            reason=data.get("reason"),
        )
        return jsonify({"id": request_id}), 201

    @app.route("/api/leave", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        reqs = container.leave_service.list_my_requests(current_user_id())
        return jsonify({"requests": [_request_to_dict(r) for r in reqs]})

    @app.route("/api/leave/balance", methods=["GET"], endpoint="my_leave_balance")
    @login_required
    def my_leave_balance():
        balance = container.leave_service.get_balance(current_user_id())
        return jsonify(balance_to_dict(balance))

    @app.route("/api/leave/calendar", methods=["GET"], endpoint="leave_calendar")
    @login_required
    def leave_calendar():
        today = today_local()
        try:
            year = int(request.args.get("year", today.year))
            month = int(request.args.get("month", today.month))
        except ValueError:
            raise ValidationError("year and month must be whole numbers")

        cal = container.leave_service.calendar_for_month(year, month)
        return jsonify(
            {
                "year": cal.year,
                "month": cal.month,
                "days": {
                    day: [{"user_id": e.user_id, "name": e.name} for e in entries]
                    for day, entries in cal.days.items()
                },
            }
        )

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    def admin_leaves():
        reqs = container.leave_service.list_admin_view(search=request.args.get("search", ""))
        return jsonify({"requests": [_request_to_dict(r) for r in reqs]})

    @app.route("/api/admin/leaves/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @admin_required
    def approve_leave(request_id: int):
        container.leave_service.approve(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            request_id=request_id,
        )
        return jsonify({"id": request_id, "status": "approved"})

    @app.route("/api/admin/leaves/<int:request_id>/deny", methods=["POST"], endpoint="deny_leave")
    @admin_required
    def deny_leave(request_id: int):
        container.leave_service.deny(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            request_id=request_id,
        )
        return jsonify({"id": request_id, "status": "denied"})

    @app.route("/api/admin/leave-balances", methods=["GET"], endpoint="leave_balances")
    @admin_required
    def leave_balances():
        balances = container.leave_service.list_balances(search=request.args.get("search", ""))
        return jsonify({"balances": [balance_to_dict(b) for b in balances]})

    @app.route("/api/admin/leave-balances/<int:user_id>/total", methods=["PUT"], endpoint="set_total_leave")
    @admin_required
    def set_total_leave(user_id: int):
        earned = container.leave_service.set_total_earned_days(
            current_role=current_role(),
            user_id=user_id,
            requested_total=json_body().get("total"),
        )
        return jsonify({"user_id": user_id, "earned_days": earned})

    @app.route("/api/admin/leave-balances/<int:user_id>/bonus", methods=["PUT"], endpoint="set_bonus_leave")
    @admin_required
    def set_bonus_leave(user_id: int):
        bonus = json_body().get("bonus_days")
        container.leave_service.set_bonus_days(current_role=current_role(), user_id=user_id, bonus_days=bonus)
        return jsonify({"user_id": user_id, "bonus_days": bonus})

    @app.route("/api/admin/leave-balances/<int:user_id>/bonus/reset", methods=["POST"], endpoint="reset_bonus_leave")
    @admin_required
    def reset_bonus_leave(user_id: int):
        container.leave_service.reset_bonus_days(current_role=current_role(), user_id=user_id)
        return jsonify({"user_id": user_id, "bonus_days": 0})
