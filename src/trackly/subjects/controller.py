from __future__ import annotations

from flask import Flask, request

from ..common.web import current_user_id, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/subjects", methods=["GET"], endpoint="subjects_list")
    @login_required
    def subjects_list():
        semester = request.args.get("semester", type=int)
        subjects = container.subject_service.list(current_user_id(), semester=semester)
        return ok([s.to_dict() for s in subjects], count=len(subjects))

    @app.route("/subjects", methods=["POST"], endpoint="subjects_create")
    @login_required
    def subjects_create():
        subject = container.subject_service.create(current_user_id(), json_body())
        return ok(subject.to_dict(), status=201)

    @app.route("/subjects/<int:subject_id>", methods=["DELETE"], endpoint="subjects_delete")
    @login_required
    def subjects_delete(subject_id: int):
        container.subject_service.delete(current_user_id(), subject_id)
        return ok({})

    @app.route("/subjects/semester/<int:semester>", methods=["GET"], endpoint="subjects_for_semester")
    @login_required
    def subjects_for_semester(semester: int):
        subjects = container.subject_service.list(current_user_id(), semester=semester)
        return ok([s.to_dict() for s in subjects], count=len(subjects))

    @app.route("/subjects/<int:subject_id>", methods=["GET"], endpoint="subjects_get")
    @login_required
    def subjects_get(subject_id: int):
        return ok(container.subject_service.get(current_user_id(), subject_id).to_dict())

    @app.route("/subjects/<int:subject_id>", methods=["PUT"], endpoint="subjects_update")
    @login_required
    def subjects_update(subject_id: int):
        return ok(container.subject_service.update(current_user_id(), subject_id, json_body()).to_dict())
