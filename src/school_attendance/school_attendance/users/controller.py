from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.exceptions import AuthError, DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="index")
    def index():
        """Entry point: re-check any stored token before showing the dashboard."""

        try:
            user = container.auth_service.restore()
        except AuthError as e:
            flash(str(e), "warning")
            return redirect(url_for("login"))

        if user is None:
            return redirect(url_for("login"))
        return redirect(url_for("dashboard"))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if container.auth_service.current_user() is not None and request.method == "GET":
            return redirect(url_for("dashboard"))

        username = ""
        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")

            try:
                user = container.auth_service.login(username, password)
                flash(f"Welcome, {user.full_name}!", "success")
                return redirect(url_for("dashboard"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception as e:
                logger.exception("Unexpected login failure")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while logging in: {e}", "danger")
                else:
                    flash("System error while logging in", "danger")

        return render_template("login.html", username=username)

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.auth_service.logout()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))
