from __future__ import annotations

from flask import Flask

from ..common.web import current_user_id, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/auto-attendance/toggle", methods=["PUT"], endpoint="auto_attendance_toggle")
    @login_required
    def auto_attendance_toggle():
        enabled = container.auto_attendance_service.toggle(current_user_id(), json_body().get("enabled"))
        return ok({"autoAttendanceEnabled": enabled})

    @app.route("/auto-attendance/status", methods=["GET"], endpoint="auto_attendance_status")
    @login_required
    def auto_attendance_status():
        return ok({"autoAttendanceEnabled": container.auto_attendance_service.status(current_user_id())})

    @app.route("/auto-attendance/mark-past", methods=["POST"], endpoint="auto_attendance_mark_past")
    @login_required
    def auto_attendance_mark_past():
        result = container.auto_attendance_service.mark_past_classes(current_user_id())
        return ok([r.to_dict() for r in result.records], count=result.count, message=result.message)

    @app.route("/auto-attendance/bulk-upload", methods=["POST"], endpoint="auto_attendance_bulk_upload")
    @login_required
    def auto_attendance_bulk_upload():
        records = container.auto_attendance_service.upload_day_records(
            current_user_id(), json_body().get("attendanceRecords")
        )
        return ok([r.to_dict() for r in records], count=len(records))
