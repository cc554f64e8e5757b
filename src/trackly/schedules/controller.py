from __future__ import annotations

from flask import Flask

from ..common.web import current_user_id, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/schedule", methods=["GET"], endpoint="schedule_get")
    @login_required
    def schedule_get():
        schedule = container.schedule_service.current(current_user_id())
        if schedule is None:
            return ok(None, message="No schedule found")
        return ok(schedule.to_dict())

    @app.route("/schedule", methods=["POST"], endpoint="schedule_create")
    @login_required
    def schedule_create():
        schedule = container.schedule_service.create(current_user_id(), json_body())
        return ok(schedule.to_dict(), status=201)

    @app.route("/schedule", methods=["DELETE"], endpoint="schedule_delete")
    @login_required
    def schedule_delete():
        removed = container.schedule_service.delete(current_user_id())
        return ok({}, message=f"Deleted {removed} schedule(s)")
