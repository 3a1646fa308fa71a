from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import login_required
from ..core.constants import GENDER_CHOICES, SAMPLE_IMPORT_HEADER
from ..core.exceptions import DomainError
from ..container import Container
from .model import StudentForm

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    def _class_name(class_id: int) -> str:
        return request.values.get("name") or container.dashboard_service.class_name(class_id)

    def _back(class_id: int, class_name: str):
        return redirect(url_for("manage_students", class_id=class_id, name=class_name))

    @app.route("/classes/<int:class_id>/students", endpoint="manage_students")
    @login_required
    def manage_students(class_id: int):
        class_name = _class_name(class_id)
        students, error = [], None
        try:
            students = roster.list_students(class_id)
        except DomainError as e:
            error = str(e) or "Failed to load students"
        return render_template(
            "students.html",
            class_id=class_id,
            class_name=class_name,
            students=students,
            error=error,
            genders=GENDER_CHOICES,
            sample_header=SAMPLE_IMPORT_HEADER,
            active_page="students",
        )

    @app.route("/classes/<int:class_id>/students", methods=["POST"], endpoint="add_student")
    @login_required
    def add_student(class_id: int):
        class_name = _class_name(class_id)
        form = StudentForm.from_mapping(request.form)
        try:
            roster.add_student(class_id, form)
            flash(f"{form.full_name} has been added to {class_name}.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Adding a student to class %s failed", class_id)
            flash("System error while adding student", "danger")
        return _back(class_id, class_name)

    @app.route("/classes/<int:class_id>/students/import", methods=["POST"], endpoint="import_students")
    @login_required
    def import_students(class_id: int):
        class_name = _class_name(class_id)
        upload = request.files.get("csv_file")
        if upload is None or not upload.filename:
            flash("Please choose a CSV file to upload.", "warning")
            return _back(class_id, class_name)

        try:
            outcome = roster.bulk_import(
                class_id,
                filename=upload.filename,
                content_type=upload.mimetype,
                data=upload.read(),
            )
            message = f"{outcome.added} students added to {class_name}."
            if outcome.skipped:
                message += f" {outcome.skipped} invalid rows skipped."
            flash(message, "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("CSV import into class %s failed", class_id)
            flash("Failed to process CSV file", "danger")
        return _back(class_id, class_name)

    @app.route(
        "/classes/<int:class_id>/students/<int:student_id>/delete",
        methods=["GET", "POST"],
        endpoint="delete_student",
    )
    @login_required
    def delete_student(class_id: int, student_id: int):
        class_name = _class_name(class_id)

        if request.method == "GET":
            try:
                student = next((s for s in roster.list_students(class_id) if s.id == student_id), None)
            except DomainError as e:
                flash(str(e), "danger")
                return _back(class_id, class_name)
            if student is None:
                flash("Student not found in this class.", "warning")
                return _back(class_id, class_name)
            return render_template(
                "confirm_delete.html",
                class_id=class_id,
                class_name=class_name,
                student=student,
            )

        try:
            roster.delete_student(class_id, student_id, confirmed=request.form.get("confirm") == "yes")
            flash(f"{request.form.get('student_name') or 'Student'} has been removed from {class_name}.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Removing student %s failed", student_id)
            flash("System error while removing student", "danger")
        return _back(class_id, class_name)
