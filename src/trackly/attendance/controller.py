from __future__ import annotations

import csv
import io
from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_user_id, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _range_args(*, default_to_month: bool):
        today = date.today()
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        start = parse_iso_date(start_s) if start_s else (today.replace(day=1) if default_to_month else None)
        end = parse_iso_date(end_s) if end_s else (today if default_to_month else None)
        return start, end

    def _write_report_csv(*, data, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["date", "subject", "class_type", "status", "start_time", "end_time", "auto_marked"],
        )
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/attendance", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def attendance_mark():
        record = container.attendance_service.mark(current_user_id(), json_body())
        return ok(record.to_dict(), status=201)

    @app.route("/attendance", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        start, end = _range_args(default_to_month=False)
        records = container.attendance_service.history(current_user_id(), start=start, end=end)
        return ok([r.to_dict() for r in records], count=len(records))

    @app.route("/attendance/report", methods=["GET"], endpoint="attendance_report")
    @login_required
    def attendance_report():
        start, end = _range_args(default_to_month=True)
        data = container.attendance_service.build_report(current_user_id(), start=start, end=end)
        return ok(
            {
                "start": start.isoformat(),
                "end": end.isoformat(),
                "rows": data.rows,
                "summary": data.summary,
                "overall": data.overall,
            }
        )

    @app.route("/attendance/report.csv", methods=["GET"], endpoint="attendance_report_csv")
    @login_required
    def attendance_report_csv():
        start, end = _range_args(default_to_month=True)
        data = container.attendance_service.build_report(current_user_id(), start=start, end=end)
        filename = f"attendance_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(data=data, filename=filename)

    @app.route("/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @login_required
    def attendance_stats():
        return ok(container.attendance_service.stats(current_user_id()).to_dict())

    @app.route("/attendance/range", methods=["GET"], endpoint="attendance_range")
    @login_required
    def attendance_range():
        start_s = request.args.get("startDate")
        end_s = request.args.get("endDate")
        records = container.attendance_service.in_range(
            current_user_id(),
            start=parse_iso_date(start_s) if start_s else None,
            end=parse_iso_date(end_s) if end_s else None,
        )
        return ok([r.to_dict() for r in records], count=len(records))
