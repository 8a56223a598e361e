from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a school user (admin, preceptor or student).

    `document` is the national id number used to log in. `course` is the
    course-group label ("5to Año A") and only applies to students.
    """

    user_id: int
    name: str
    document: str
    role: Role
    course: Optional[str] = None
    avatar_url: Optional[str] = None
