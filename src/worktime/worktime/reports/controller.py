from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_minutes
from ..common.http import json_api, optional_date_arg
from ..container import Container
from .export import XLSX_MIMETYPE, export_filename, to_csv_text, to_xlsx_bytes
from .service import ReportData


def register(app: Flask, container: Container) -> None:
    def _build(user_id: int) -> ReportData:
        return container.report_service.build(
            user_id,
            view=request.args.get("view") or "monthly",
            start=optional_date_arg("start"),
            end=optional_date_arg("end"),
            rounding=request.args.get("rounding") or None,
        )

    def _attachment(body, *, mimetype: str, filename: str):
        return app.response_class(
            body,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/users/<int:user_id>/report", methods=["GET"], endpoint="api_report")
    @json_api
    def report(user_id: int):
        data = _build(user_id)
        s = data.summary
        return jsonify(
            {
                "success": True,
                "rounding": data.rounding.value,
                "summary": s.as_dict(),
                "text": {
                    "worked": format_minutes(s.total_worked_minutes),
                    "committed": format_minutes(s.total_committed_minutes),
                    "overtime": format_minutes(s.overtime_minutes),
                    "short": format_minutes(s.short_minutes),
                },
            }
        )

    @app.route("/api/users/<int:user_id>/report.csv", methods=["GET"], endpoint="api_report_csv")
    @json_api
    def report_csv(user_id: int):
        data = _build(user_id)
        body = to_csv_text(data.export_rows()).encode("utf-8-sig")
        return _attachment(body, mimetype="text/csv", filename=export_filename(data.summary, "csv"))

    @app.route("/api/users/<int:user_id>/report.xlsx", methods=["GET"], endpoint="api_report_xlsx")
    @json_api
    def report_xlsx(user_id: int):
        data = _build(user_id)
        body = to_xlsx_bytes(data.export_rows())
        return _attachment(body, mimetype=XLSX_MIMETYPE, filename=export_filename(data.summary, "xlsx"))
