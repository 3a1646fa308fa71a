from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .api.client import ApiClient, ApiConfig
from .api.credentials import CredentialStore, FlaskSessionCredentialStore
from .attendance.api_attendance_repository import ApiAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.state_store import AttendanceStateStore, InMemoryAttendanceStateStore, session_owner
from .classes.api_dashboard_repository import ApiDashboardRepository
from .classes.repository import DashboardRepository
from .classes.service import DashboardService
from .core.constants import DEFAULT_API_BASE_URL, DEFAULT_API_TIMEOUT
from .students.api_student_repository import ApiStudentRepository
from .students.repository import StudentRepository
from .students.service import RosterService
from .users.api_auth_repository import ApiAuthRepository
from .users.repository import AuthRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    credentials: CredentialStore
    attendance_states: AttendanceStateStore

    auth_repo: AuthRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    dashboard_repo: DashboardRepository

    auth_service: AuthService
    roster_service: RosterService
    attendance_service: AttendanceService
    dashboard_service: DashboardService


def assemble(
    *,
    credentials: CredentialStore,
    auth_repo: AuthRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    dashboard_repo: DashboardRepository,
    attendance_states: Optional[AttendanceStateStore] = None,
) -> Container:
    """Wire services on top of the given repositories."""

    states = attendance_states or InMemoryAttendanceStateStore()

    def forget_open_sheet() -> None:
        owner = session_owner(create=False)
        if owner:
            states.discard(owner)

    return Container(
        credentials=credentials,
        attendance_states=states,
        auth_repo=auth_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        dashboard_repo=dashboard_repo,
        auth_service=AuthService(auth_repo, credentials, on_logout=forget_open_sheet),
        roster_service=RosterService(students_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo, states),
        dashboard_service=DashboardService(dashboard_repo),
    )


def build_container(*, api_config: dict, http: Optional[requests.Session] = None) -> Container:
    config = ApiConfig(
        base_url=str(api_config.get("base_url") or DEFAULT_API_BASE_URL),
        timeout=float(api_config.get("timeout", DEFAULT_API_TIMEOUT)),
    )
    credentials = FlaskSessionCredentialStore()
    api = ApiClient(config, credentials, http=http)

    return assemble(
        credentials=credentials,
        auth_repo=ApiAuthRepository(api),
        students_repo=ApiStudentRepository(api),
        attendance_repo=ApiAttendanceRepository(api),
        dashboard_repo=ApiDashboardRepository(api),
    )
