from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .app_settings.repository import InMemorySettingsRepository, MySQLSettingsRepository, SettingsRepository
from .app_settings.service import SettingsService
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .certificates.service import CertificateService
from .certificates.storage import CertificateStorage, InMemoryCertificateStorage, LocalCertificateStorage
from .courses.memory_course_repository import InMemoryCourseRepository, InMemoryMembershipRepository
from .courses.mysql_course_repository import MySQLCourseRepository, MySQLMembershipRepository
from .courses.repository import CourseRepository, MembershipRepository
from .courses.service import CourseService
from .database.connection import DatabaseConnection, DBConfig
from .news.memory_news_repository import InMemoryNewsRepository
from .news.mysql_news_repository import MySQLNewsRepository
from .news.repository import NewsRepository
from .news.service import NewsService
from .reports.service import ReportService
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    courses_repo: CourseRepository
    memberships_repo: MembershipRepository
    attendance_repo: AttendanceRepository
    news_repo: NewsRepository
    settings_repo: SettingsRepository
    storage: CertificateStorage

    auth_service: AuthService
    user_service: UserService
    course_service: CourseService
    attendance_service: AttendanceService
    certificate_service: CertificateService
    report_service: ReportService
    news_service: NewsService
    settings_service: SettingsService


def _wire(
    *,
    users_repo: UserRepository,
    courses_repo: CourseRepository,
    memberships_repo: MembershipRepository,
    attendance_repo: AttendanceRepository,
    news_repo: NewsRepository,
    settings_repo: SettingsRepository,
    storage: CertificateStorage,
) -> Container:
    return Container(
        users_repo=users_repo,
        courses_repo=courses_repo,
        memberships_repo=memberships_repo,
        attendance_repo=attendance_repo,
        news_repo=news_repo,
        settings_repo=settings_repo,
        storage=storage,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        course_service=CourseService(courses_repo, memberships_repo, attendance_repo),
        attendance_service=AttendanceService(attendance_repo, memberships_repo, users_repo, courses_repo),
        certificate_service=CertificateService(attendance_repo, storage, users_repo, courses_repo),
        report_service=ReportService(attendance_repo, users_repo),
        news_service=NewsService(news_repo, users_repo),
        settings_service=SettingsService(settings_repo),
    )


def _build_storage(upload_dir: Optional[str], url_prefix: str) -> CertificateStorage:
    if upload_dir:
        return LocalCertificateStorage(upload_dir, url_prefix=url_prefix)
    return InMemoryCertificateStorage(url_prefix=url_prefix)


def build_memory_container(*, upload_dir: Optional[str] = None, url_prefix: str = "/uploads") -> Container:
    """Everything in process memory; used by tests and demos."""
    users_repo = InMemoryUserRepository()
    return _wire(
        users_repo=users_repo,
        courses_repo=InMemoryCourseRepository(),
        memberships_repo=InMemoryMembershipRepository(),
        attendance_repo=InMemoryAttendanceRepository(),
        news_repo=InMemoryNewsRepository(users_repo),
        settings_repo=InMemorySettingsRepository(),
        storage=_build_storage(upload_dir, url_prefix),
    )


def build_mysql_container(
    *,
    db_config: dict,
    upload_dir: Optional[str] = None,
    url_prefix: str = "/uploads",
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return _wire(
        users_repo=MySQLUserRepository(conn),
        courses_repo=MySQLCourseRepository(conn),
        memberships_repo=MySQLMembershipRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        news_repo=MySQLNewsRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        storage=_build_storage(upload_dir, url_prefix),
    )


def build_container(
    *,
    backend: str,
    db_config: Optional[dict] = None,
    upload_dir: Optional[str] = None,
    url_prefix: str = "/uploads",
) -> Container:
    if backend == "memory":
        return build_memory_container(upload_dir=upload_dir, url_prefix=url_prefix)
    if backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql backend")
        return build_mysql_container(db_config=db_config, upload_dir=upload_dir, url_prefix=url_prefix)
    raise ValueError(f"Unknown backend: {backend!r}")
