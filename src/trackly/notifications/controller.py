from __future__ import annotations

from flask import Flask, request

from ..common.web import current_user_id, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/notifications", methods=["GET"], endpoint="notifications_list")
    @login_required
    def notifications_list():
        unread_only = request.args.get("unread", "").lower() in ("1", "true", "yes")
        items = container.notification_service.list(
            current_user_id(), unread_only=unread_only, limit=request.args.get("limit", 50)
        )
        return ok([n.to_dict() for n in items], count=len(items))

    @app.route("/notifications/unread-count", methods=["GET"], endpoint="notifications_unread_count")
    @login_required
    def notifications_unread_count():
        return ok({"count": container.notification_service.unread_count(current_user_id())})

    @app.route("/notifications/<int:notification_id>/read", methods=["PUT"], endpoint="notifications_mark_read")
    @login_required
    def notifications_mark_read(notification_id: int):
        notification = container.notification_service.mark_read(current_user_id(), notification_id)
        return ok(notification.to_dict())

    @app.route("/notifications/read-all", methods=["PUT"], endpoint="notifications_mark_all_read")
    @login_required
    def notifications_mark_all_read():
        updated = container.notification_service.mark_all_read(current_user_id())
        return ok({}, message=f"Marked {updated} notification(s) as read")

    @app.route("/notifications/clear-read", methods=["DELETE"], endpoint="notifications_clear_read")
    @login_required
    def notifications_clear_read():
        container.notification_service.clear_read(current_user_id())
        return ok({}, message="All read notifications cleared")

    @app.route("/notifications/<int:notification_id>", methods=["DELETE"], endpoint="notifications_delete")
    @login_required
    def notifications_delete(notification_id: int):
        container.notification_service.delete(current_user_id(), notification_id)
        return ok({}, message="Notification deleted")
