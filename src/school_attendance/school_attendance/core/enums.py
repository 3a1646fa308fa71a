from __future__ import annotations

from enum import Enum


class AttendanceSessionName(str, Enum):
    """Named attendance-taking window of a school day."""

    MORNING = "morning"
    AFTERNOON = "afternoon"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class AttendanceState(str, Enum):
    """Lifecycle of one (class, date, session) attendance sheet."""

    UNSUBMITTED = "unsubmitted"
    SUBMITTED = "submitted"
    EDITING = "editing"


class AuthState(str, Enum):
    LOGGED_OUT = "logged_out"
    AUTHENTICATING = "authenticating"
    LOGGED_IN = "logged_in"
