from __future__ import annotations

import io
from functools import wraps

from flask import flash, redirect, send_file, session, url_for

from ..attendance.model import ReportFile
from ..core.constants import ACCESS_TOKEN_KEY


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get(ACCESS_TOKEN_KEY):
            flash("Please log in to continue.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def send_report(report: ReportFile):
    """Download a generated CSV as an attachment (UTF-8, no BOM)."""

    buf = io.BytesIO(report.content.encode("utf-8"))
    return send_file(
        buf,
        mimetype=f"{report.mimetype}; charset=utf-8",
        as_attachment=True,
        download_name=report.filename,
    )
