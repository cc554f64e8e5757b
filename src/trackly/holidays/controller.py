from __future__ import annotations

from flask import Flask

from ..common.web import current_user_id, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/holidays", methods=["GET"], endpoint="holidays_list")
    @login_required
    def holidays_list():
        return ok([h.to_dict() for h in container.holiday_service.list(current_user_id())])

    @app.route("/holidays/<semester>", methods=["GET"], endpoint="holidays_for_semester")
    @login_required
    def holidays_for_semester(semester: str):
        holidays = container.holiday_service.list_for_semester(current_user_id(), semester)
        return ok([h.to_dict() for h in holidays])

    @app.route("/holidays", methods=["POST"], endpoint="holidays_add")
    @login_required
    def holidays_add():
        holiday = container.holiday_service.add(current_user_id(), json_body())
        return ok(holiday.to_dict(), status=201)

    @app.route("/holidays/range", methods=["POST"], endpoint="holidays_add_range")
    @login_required
    def holidays_add_range():
        holidays = container.holiday_service.add_range(current_user_id(), json_body())
        return ok([h.to_dict() for h in holidays], count=len(holidays))

    @app.route("/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    @login_required
    def holidays_delete(holiday_id: int):
        container.holiday_service.delete(current_user_id(), holiday_id)
        return ok({}, message="Holiday deleted")
