from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, SystemClock
from .commitments.mysql_commitment_repository import MySQLCommitmentRepository, MySQLHolidayRepository
from .commitments.repository import CommitmentRepository, HolidayRepository
from .commitments.service import CommitmentService, HolidayService
from .core.constants import MANUAL_EDIT_WINDOW_MONTHS
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .sync.mysql_outbox_repository import MySQLOutboxRepository
from .sync.outbox import Outbox
from .sync.repository import OutboxStore
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserSettingsService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    commitments_repo: CommitmentRepository
    holidays_repo: HolidayRepository

    user_settings_service: UserSettingsService
    attendance_service: AttendanceService
    commitment_service: CommitmentService
    holiday_service: HolidayService
    report_service: ReportService

    outbox: Optional[Outbox] = None
    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    commitments_repo: CommitmentRepository,
    holidays_repo: HolidayRepository,
    outbox_store: Optional[OutboxStore] = None,
    clock: Optional[Clock] = None,
    edit_window_months: int = MANUAL_EDIT_WINDOW_MONTHS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services over any repository implementations."""

    clock = clock or SystemClock()
    outbox = Outbox(outbox_store) if outbox_store is not None else None

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        commitments_repo=commitments_repo,
        holidays_repo=holidays_repo,
        user_settings_service=UserSettingsService(users_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            users_repo,
            clock=clock,
            outbox=outbox,
            edit_window_months=edit_window_months,
        ),
        commitment_service=CommitmentService(users_repo, commitments_repo, holidays_repo, clock=clock),
        holiday_service=HolidayService(users_repo, holidays_repo),
        report_service=ReportService(attendance_repo, users_repo, commitments_repo, holidays_repo, clock=clock),
        outbox=outbox,
        conn=conn,
    )


def build_container(*, db_config: dict, enable_outbox: bool = False, edit_window_months: int = MANUAL_EDIT_WINDOW_MONTHS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        commitments_repo=MySQLCommitmentRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        outbox_store=MySQLOutboxRepository(conn) if enable_outbox else None,
        edit_window_months=edit_window_months,
        conn=conn,
    )
