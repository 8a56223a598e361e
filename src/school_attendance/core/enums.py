from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "Admin"
    PRECEPTOR = "Preceptor"
    STUDENT = "Student"


class AttendanceStatus(str, Enum):
    """Attendance status.

    PRESENT is never stored: a student is present when no record exists.
    """

    PRESENT = "present"
    ABSENT = "absent"
    JUSTIFIED = "justified"
    LATE = "late"


class CertificateStatus(str, Enum):
    """Review state of a certificate attached to an absence."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
