from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_role, current_user_id, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="notifications")
    @login_required
    def notifications():
        user_id = current_user_id()
        items = container.notification_service.list_for_user(user_id)
        return jsonify(
            {
                "unread": container.notification_service.unread_count(user_id),
                "notifications": [
                    {
                        "id": n.notification_id,
                        "message": n.message,
                        "type": n.type,
                        "read": n.read,
                        "global": n.is_global,
                        "created_at": n.created_at.isoformat() if n.created_at else None,
                    }
                    for n in items
                ],
            }
        )

    @app.route("/api/notifications/<int:notification_id>/read", methods=["POST"], endpoint="read_notification")
    @login_required
    def read_notification(notification_id: int):
        container.notification_service.mark_read(user_id=current_user_id(), notification_id=notification_id)
        return jsonify({"id": notification_id, "read": True})

    @app.route("/api/admin/notice", methods=["POST"], endpoint="send_notice")
    @admin_required
    def send_notice():
        sent = container.notification_service.broadcast(
            current_role=current_role(),
            message=json_body().get("message"),
        )
        return jsonify({"sent": sent}), 201
