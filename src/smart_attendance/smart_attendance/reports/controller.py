from __future__ import annotations

from flask import Flask, request

from ..common.responses import fail
from ..core.exceptions import DomainError
from ..container import Container
from .service import ExportFile


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _write_csv(export: ExportFile):
        return app.response_class(
            export.content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )

    @app.route("/reports/summary/<year_month>.csv", methods=["GET"], endpoint="report_summary_csv")
    def report_summary_csv(year_month: str):
        try:
            return _write_csv(service.monthly_summary(year_month))
        except DomainError as e:
            return fail(e)

    @app.route("/reports/log.csv", methods=["GET"], endpoint="report_log_csv")
    def report_log_csv():
        try:
            return _write_csv(service.raw_log(day=request.args.get("date")))
        except DomainError as e:
            return fail(e)
