from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, flash, redirect, request, url_for
from werkzeug.exceptions import RequestEntityTooLarge

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .container import Container, build_container
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    api_config = getattr(settings, "API_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SCHOOL_NAME"] = getattr(settings, "SCHOOL_NAME", "School Attendance")
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_MB", 2)) * 1024 * 1024

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logger.info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    container = container or build_container(api_config=api_config)

    @app.context_processor
    def inject_globals():
        return {
            "school_name": app.config["SCHOOL_NAME"],
            "current_user": container.auth_service.current_user(),
        }

    @app.errorhandler(RequestEntityTooLarge)
    def upload_too_large(_e):
        flash(f"File is too large (max {app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)} MB).", "danger")
        return redirect(request.referrer or url_for("dashboard"))

    register_users(app, container)
    register_classes(app, container)
    register_attendance(app, container)
    register_students(app, container)

    return app
