from __future__ import annotations

from flask import Flask, request, send_file

from ..common.web import current_user_id, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/uploads/schedule", methods=["POST"], endpoint="uploads_schedule")
    @login_required
    def uploads_schedule():
        file = request.files.get("schedule") or request.files.get("pdfSchedule")
        if file is None or not file.filename:
            raise ValidationError("Please upload a PDF file")

        upload = container.upload_service.save_schedule_pdf(
            current_user_id(),
            stream=file.stream,
            filename=file.filename,
            mimetype=file.mimetype,
        )
        return ok(upload.to_dict(), count=len(upload.items))

    @app.route("/users/schedule/pdf", methods=["GET"], endpoint="uploads_schedule_info")
    @login_required
    def uploads_schedule_info():
        return ok(container.upload_service.stored_schedule_pdf(current_user_id()).to_dict())

    @app.route("/users/schedule/pdf/download", methods=["GET"], endpoint="uploads_schedule_download")
    @login_required
    def uploads_schedule_download():
        stored = container.upload_service.stored_schedule_pdf(current_user_id())
        return send_file(
            stored.path, mimetype="application/pdf", as_attachment=True, download_name=stored.original_name
        )

    @app.route("/users/schedule/pdf", methods=["DELETE"], endpoint="uploads_schedule_delete")
    @login_required
    def uploads_schedule_delete():
        container.upload_service.delete_schedule_pdf(current_user_id())
        return ok({}, message="Schedule PDF has been removed")
