from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, url_for

from ..common.web import login_required, send_report
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        data, error = None, None
        try:
            data = container.dashboard_service.load()
        except DomainError as e:
            error = str(e) or "Failed to load dashboard data"
        except Exception:
            logger.exception("Dashboard failed")
            error = "Failed to load dashboard data"
        return render_template("dashboard.html", dashboard=data, error=error, active_page="dashboard")

    @app.route("/reports/combined.csv", endpoint="combined_report_csv")
    @login_required
    def combined_report_csv():
        try:
            dashboard = container.dashboard_service.load()
        except DomainError as e:
            # The class list is optional in the report.
            logger.warning("Exporting combined report without class list: %s", e)
            dashboard = None

        try:
            report = container.dashboard_service.export_combined_report(dashboard=dashboard)
        except Exception:
            logger.exception("Combined report export failed")
            flash("Failed to generate attendance report. Some data may not be available yet.", "danger")
            return redirect(url_for("dashboard"))

        return send_report(report)
