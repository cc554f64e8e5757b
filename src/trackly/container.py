from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .academic_periods.mysql_academic_period_repository import MySQLAcademicPeriodRepository
from .academic_periods.repository import AcademicPeriodRepository
from .academic_periods.service import AcademicPeriodService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auto_attendance.service import AutoAttendanceService
from .core.constants import MAX_UPLOAD_BYTES
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .notifications.email_service import EmailService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .schedule_parser.parser import ScheduleParser
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.repository import SubjectRepository
from .subjects.service import SubjectService
from .todos.mysql_todo_repository import MySQLTodoRepository
from .todos.repository import TodoRepository
from .todos.service import TodoService
from .uploads.service import UploadService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, PasswordResetService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    subjects_repo: SubjectRepository
    periods_repo: AcademicPeriodRepository
    holidays_repo: HolidayRepository
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository
    notifications_repo: NotificationRepository
    todos_repo: TodoRepository

    email_service: EmailService
    auth_service: AuthService
    user_service: UserService
    password_reset_service: PasswordResetService
    subject_service: SubjectService
    academic_period_service: AcademicPeriodService
    holiday_service: HolidayService
    schedule_service: ScheduleService
    notification_service: NotificationService
    attendance_service: AttendanceService
    auto_attendance_service: AutoAttendanceService
    upload_service: UploadService
    todo_service: TodoService


def wire_container(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    subjects_repo: SubjectRepository,
    periods_repo: AcademicPeriodRepository,
    holidays_repo: HolidayRepository,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    notifications_repo: NotificationRepository,
    todos_repo: TodoRepository,
    email_service: EmailService,
    upload_dir: str | Path = "uploads",
    max_upload_bytes: int = MAX_UPLOAD_BYTES,
    schedule_parser: Optional[ScheduleParser] = None,
    frontend_url: str = "http://localhost:3000",
) -> Container:
    """Build every service on top of the given repositories (MySQL or in-memory)."""

    user_service = UserService(users_repo)
    password_reset_service = PasswordResetService(users_repo, email=email_service, frontend_url=frontend_url)
    subject_service = SubjectService(subjects_repo)
    auth_service = AuthService(
        users_repo,
        on_register=lambda user_id, semester: subject_service.ensure_preparatory(user_id, semester),
    )
    academic_period_service = AcademicPeriodService(periods_repo, subjects=subject_service)
    holiday_service = HolidayService(holidays_repo, academic_period_service)
    schedule_service = ScheduleService(
        schedules_repo, users=user_service, subjects=subject_service, periods=academic_period_service
    )
    notification_service = NotificationService(notifications_repo, users=users_repo, email=email_service)
    attendance_service = AttendanceService(
        attendance_repo, subjects=subject_service, users=user_service, notifications=notification_service
    )
    auto_attendance_service = AutoAttendanceService(
        users=user_service,
        schedules=schedules_repo,
        periods=academic_period_service,
        holidays=holiday_service,
        subjects=subject_service,
        attendance=attendance_service,
        notifications=notification_service,
    )
    upload_service = UploadService(
        upload_dir=upload_dir, users=user_service, parser=schedule_parser, max_bytes=max_upload_bytes
    )
    todo_service = TodoService(todos_repo, subjects=subject_service, notifications=notification_service)

    return Container(
        conn=conn,
        users_repo=users_repo,
        subjects_repo=subjects_repo,
        periods_repo=periods_repo,
        holidays_repo=holidays_repo,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        notifications_repo=notifications_repo,
        todos_repo=todos_repo,
        email_service=email_service,
        auth_service=auth_service,
        user_service=user_service,
        password_reset_service=password_reset_service,
        subject_service=subject_service,
        academic_period_service=academic_period_service,
        holiday_service=holiday_service,
        schedule_service=schedule_service,
        notification_service=notification_service,
        attendance_service=attendance_service,
        auto_attendance_service=auto_attendance_service,
        upload_service=upload_service,
        todo_service=todo_service,
    )


def build_container(
    *,
    db_config: dict,
    smtp_config: dict,
    upload_dir: str | Path = "uploads",
    max_upload_bytes: int = MAX_UPLOAD_BYTES,
    frontend_url: str = "http://localhost:3000",
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        subjects_repo=MySQLSubjectRepository(conn),
        periods_repo=MySQLAcademicPeriodRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        todos_repo=MySQLTodoRepository(conn),
        email_service=EmailService(smtp_config),
        upload_dir=upload_dir,
        max_upload_bytes=max_upload_bytes,
        frontend_url=frontend_url,
    )
