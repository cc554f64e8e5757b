from __future__ import annotations

from flask import Flask

from ..common.web import current_user_id, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/academic-periods", methods=["GET"], endpoint="academic_periods_list")
    @login_required
    def academic_periods_list():
        periods = container.academic_period_service.list(current_user_id())
        return ok([p.to_dict() for p in periods])

    @app.route("/academic-periods/<semester>", methods=["GET"], endpoint="academic_periods_get")
    @login_required
    def academic_periods_get(semester: str):
        return ok(container.academic_period_service.get(current_user_id(), semester).to_dict())

    @app.route("/academic-periods", methods=["POST"], endpoint="academic_periods_save")
    @login_required
    def academic_periods_save():
        period = container.academic_period_service.save(current_user_id(), json_body())
        return ok(period.to_dict())

    @app.route("/academic-periods/archived/all", methods=["GET"], endpoint="academic_periods_archived")
    @login_required
    def academic_periods_archived():
        archive = container.academic_period_service.archived(current_user_id())
        return ok([a.to_dict() for a in archive])

    @app.route("/academic-periods/<semester>", methods=["DELETE"], endpoint="academic_periods_delete")
    @login_required
    def academic_periods_delete(semester: str):
        container.academic_period_service.delete(current_user_id(), semester)
        return ok({}, message="Academic period deleted")
