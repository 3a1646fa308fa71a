from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import parse_iso_date
from ..common.web import login_required, send_report
from ..core.enums import AttendanceSessionName
from ..core.exceptions import DomainError, StaleStateError, ValidationError
from ..container import Container
from .state_store import session_owner

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _parse_session(value: str | None) -> AttendanceSessionName:
        try:
            return AttendanceSessionName((value or AttendanceSessionName.MORNING.value).lower())
        except ValueError:
            raise ValidationError("Session must be morning or afternoon")

    def _parse_date(value: str | None) -> str | None:
        if not value:
            return None
        try:
            return parse_iso_date(value).strftime("%Y-%m-%d")
        except ValueError:
            raise ValidationError("Date must be in YYYY-MM-DD format")

    def _generation() -> int:
        try:
            return int(request.form.get("generation", ""))
        except ValueError:
            return -1

    def _sheet_url(class_id: int, *, refresh: bool = False) -> str:
        manager = container.attendance_states.get(session_owner())
        params = {}
        if manager and manager.key and manager.key.class_id == class_id:
            params = {"session": manager.key.session.value, "date": manager.key.date, "name": manager.class_name}
        if refresh:
            params["refresh"] = 1
        return url_for("attendance", class_id=class_id, **params)

    def _mutate(class_id: int, action, success_message=None):
        try:
            result = action()
            if success_message:
                flash(success_message(result), "success")
        except StaleStateError as e:
            flash(str(e), "warning")
            return redirect(_sheet_url(class_id, refresh=True))
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Attendance action failed for class %s", class_id)
            flash("System error while saving attendance", "danger")
        return redirect(_sheet_url(class_id))

    @app.route("/classes/<int:class_id>/attendance", endpoint="attendance")
    @login_required
    def attendance(class_id: int):
        class_name = request.args.get("name") or container.dashboard_service.class_name(class_id)
        session_name = AttendanceSessionName.MORNING
        try:
            session_name = _parse_session(request.args.get("session"))
            manager = service.open_sheet(
                session_owner(),
                class_id=class_id,
                class_name=class_name,
                session=session_name,
                date=_parse_date(request.args.get("date")),
                refresh=bool(request.args.get("refresh")),
            )
        except DomainError as e:
            return render_template(
                "attendance.html",
                class_id=class_id,
                class_name=class_name,
                session_name=session_name,
                sheet=None,
                error=str(e) or "Failed to load students",
                sessions=list(AttendanceSessionName),
            )

        return render_template(
            "attendance.html",
            class_id=class_id,
            class_name=class_name,
            session_name=session_name,
            sheet=manager,
            summary=manager.summary(),
            error=None,
            sessions=list(AttendanceSessionName),
        )

    @app.route("/classes/<int:class_id>/attendance/toggle/<int:student_id>", methods=["POST"], endpoint="toggle_attendance")
    @login_required
    def toggle_attendance(class_id: int, student_id: int):
        return _mutate(
            class_id,
            lambda: service.toggle_presence(
                session_owner(), class_id=class_id, generation=_generation(), student_id=student_id
            ),
        )

    def _sms_note(absent: int) -> str:
        return f"Absent SMS sent to {absent} parents." if absent > 0 else "All students present!"

    @app.route("/classes/<int:class_id>/attendance/submit", methods=["POST"], endpoint="submit_attendance")
    @login_required
    def submit_attendance(class_id: int):
        return _mutate(
            class_id,
            lambda: service.submit(session_owner(), class_id=class_id, generation=_generation()),
            lambda absent: f"Attendance saved successfully. {_sms_note(absent)}",
        )

    @app.route("/classes/<int:class_id>/attendance/edit", methods=["POST"], endpoint="edit_attendance")
    @login_required
    def edit_attendance(class_id: int):
        return _mutate(
            class_id,
            lambda: service.enter_edit(session_owner(), class_id=class_id, generation=_generation()),
        )

    @app.route("/classes/<int:class_id>/attendance/cancel", methods=["POST"], endpoint="cancel_edit_attendance")
    @login_required
    def cancel_edit_attendance(class_id: int):
        return _mutate(
            class_id,
            lambda: service.cancel_edit(session_owner(), class_id=class_id, generation=_generation()),
        )

    @app.route("/classes/<int:class_id>/attendance/save", methods=["POST"], endpoint="save_attendance")
    @login_required
    def save_attendance(class_id: int):
        return _mutate(
            class_id,
            lambda: service.save_edit(session_owner(), class_id=class_id, generation=_generation()),
            lambda absent: f"Changes saved successfully. {_sms_note(absent)}",
        )

    @app.route("/classes/<int:class_id>/attendance/report.csv", endpoint="attendance_report_csv")
    @login_required
    def attendance_report_csv(class_id: int):
        try:
            report = service.export_report(session_owner(), class_id=class_id)
        except DomainError as e:
            flash(str(e), "info")
            return redirect(_sheet_url(class_id))
        return send_report(report)
