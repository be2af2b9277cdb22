from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import format_date
from ..common.responses import fail, ok
from ..core.enums import DailyStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..container import Container
from ..recognition.model import Proposal
from .aggregator import CohortSummary


def _summary_ui(s: CohortSummary) -> dict:
    return {
        "date": format_date(s.day),
        "policy": s.policy.value,
        "present": s.present,
        "late": s.late,
        "absent": s.absent,
        "unmarked": s.unmarked,
        "total": s.total,
        "present_percent": s.present_percent,
        "late_percent": s.late_percent,
        "absent_percent": s.absent_percent,
        "unmarked_percent": s.unmarked_percent,
        "failures": dict(s.failures),
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/sessions", methods=["POST"], endpoint="sessions_record")
    def sessions_record():
        """Save a reviewed scan: recognition proposals plus operator corrections."""
        data = request.get_json(silent=True) or {}
        try:
            proposals = [Proposal.from_dict(p) for p in data.get("proposals") or []]
            session = service.record_scan(
                proposals,
                image_ref=data.get("image_ref"),
                day=data.get("date"),
                adjustments=data.get("adjustments") or {},
            )
        except DomainError as e:
            return fail(e)
        return ok({"session": service.session_ui(session)}, 201)

    @app.route("/api/sessions", methods=["GET"], endpoint="sessions_list")
    def sessions_list():
        try:
            sessions = service.history(day=request.args.get("date"))
        except DomainError as e:
            return fail(e)
        stats = service.history_stats(sessions)
        return ok(
            {
                "sessions": [service.session_ui(s) for s in sessions],
                "stats": {
                    "total_scans": stats.total_scans,
                    "present": stats.present,
                    "late": stats.late,
                    "absent": stats.absent,
                    "total": stats.total,
                },
            }
        )

    @app.route("/api/sessions/<session_id>", methods=["GET"], endpoint="sessions_detail")
    def sessions_detail(session_id: str):
        session = container.sessions_repo.get_by_id(session_id)
        if not session:
            return fail(NotFoundError(f"Session {session_id} does not exist"))
        return ok({"session": service.session_ui(session), "rows": service.session_rows(session)})

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        day = request.args.get("date") or format_date(date.today())
        try:
            view = service.dashboard(day, policy=request.args.get("policy"))
        except ValueError:
            return fail(ValidationError(f"Unknown policy: {request.args.get('policy')!r}"))
        except DomainError as e:
            return fail(e)

        lists = {
            status.value: [{"person_id": p.person_id, "name": p.name} for p in view.members(status)]
            for status in DailyStatus
        }
        return ok({"summary": _summary_ui(view.summary), "members": lists})

    @app.route("/api/months/<year_month>", methods=["GET"], endpoint="month_report")
    def month_report(year_month: str):
        try:
            report = service.month_report(year_month)
        except DomainError as e:
            return fail(e)
        return ok(
            {
                "month": report.year_month,
                "days": [format_date(d) for d in report.days],
                "rows": [
                    {
                        "person_id": r.person_id,
                        "name": r.name,
                        "removed": r.removed,
                        "statuses": [s.value for s in r.statuses],
                        "present": r.summary.present,
                        "late": r.summary.late,
                        "absent": r.summary.absent,
                        "unmarked": r.summary.unmarked,
                        "total_attended": r.summary.total_attended,
                        "error": r.summary.error,
                    }
                    for r in report.rows
                ],
            }
        )

    @app.route("/api/overrides", methods=["POST"], endpoint="override")
    def override():
        data = request.get_json(silent=True) or {}
        try:
            session = service.override(
                str(data.get("person_id") or ""),
                data.get("date") or "",
                data.get("status") or "",
            )
        except DomainError as e:
            return fail(e)
        return ok({"session": service.session_ui(session)})

    @app.route("/api/overrides/toggle", methods=["POST"], endpoint="override_toggle")
    def override_toggle():
        data = request.get_json(silent=True) or {}
        try:
            status = service.toggle(str(data.get("person_id") or ""), data.get("date") or "")
        except DomainError as e:
            return fail(e)
        return ok({"status": status.value})
