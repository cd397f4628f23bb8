from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.web import current_role, current_user_id, login_required
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/clock", methods=["POST"], endpoint="clock")
    @login_required
    def clock():
        result = container.attendance_service.clock_action(current_user_id(), role=current_role())
        record = result.record
        return jsonify(
            {
                "action": result.action,
                "date": record.work_date.isoformat(),
                "clock_in": record.clock_in.isoformat() if record.clock_in else None,
                "clock_out": record.clock_out.isoformat() if record.clock_out else None,
                "corrected_clock_out": result.corrected_clock_out.isoformat() if result.corrected_clock_out else None,
            }
        )

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            limit = int(request.args.get("limit", DEFAULT_HISTORY_LIMIT))
        except ValueError:
            raise ValidationError("limit must be a whole number")
        rows = container.attendance_service.get_history_ui(current_user_id(), limit=max(limit, 1))
        return jsonify({"records": rows})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        record = container.attendance_service.get_today_record(current_user_id(), today_local())
        if record is None:
            return jsonify({"record": None})
        return jsonify(
            {
                "record": {
                    "date": record.work_date.isoformat(),
                    "clock_in": record.clock_in.isoformat() if record.clock_in else None,
                    "clock_out": record.clock_out.isoformat() if record.clock_out else None,
                }
            }
        )
