from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.validators import optional_text
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we keep for the logged-in user, plus role flags derived from it."""

    user_id: int
    name: str
    role: Role
    course: Optional[str] = None
    avatar_url: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_preceptor(self) -> bool:
        # Admins hold every preceptor privilege.
        return self.role in (Role.PRECEPTOR, Role.ADMIN)

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(
            user_id=user.user_id,
            name=user.name,
            role=user.role,
            course=user.course,
            avatar_url=user.avatar_url,
        )


class AuthService:
    """Use case: log in by document number (no password)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def login(self, document: str) -> SessionUser:
        document = str(document).strip() if document is not None else ""
        user = self._users.get_by_document(document) if document else None
        if not user:
            raise NotFoundError("User not found")
        return SessionUser.from_user(user)

    def current_user(self, user_id: int) -> SessionUser:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return SessionUser.from_user(user)


def parse_role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def list_students(self) -> Sequence[User]:
        return self._users.list_by_role(Role.STUDENT)

    def list_course_groups(self) -> Sequence[str]:
        return self._users.list_course_groups()

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def _clean(self, *, name, document, role, course: Optional[str]):
        name = optional_text(name)
        document = optional_text(document)
        if not name or not document:
            raise ValidationError("Name and document are required")
        role = parse_role(role)
        # Course groups only make sense for students.
        course = optional_text(course) if role == Role.STUDENT else None
        return name, document, role, course

    def create_user(
        self,
        *,
        name: str,
        document: str,
        role,
        course: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> User:
        name, document, role, course = self._clean(name=name, document=document, role=role, course=course)

        if self._users.get_by_document(document):
            raise ValidationError("Document already registered")

        user_id = self._users.create_user(
            name=name,
            document=document,
            role=role,
            course=course,
            avatar_url=optional_text(avatar_url),
        )
        return self.get_user(user_id)

    def update_user(
        self,
        *,
        user_id: int,
        name: str,
        document: str,
        role,
        course: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> User:
        self.get_user(user_id)
        name, document, role, course = self._clean(name=name, document=document, role=role, course=course)

        other = self._users.get_by_document(document)
        if other and other.user_id != int(user_id):
            raise ValidationError("Document already registered")

        self._users.update_user(
            user_id=int(user_id),
            name=name,
            document=document,
            role=role,
            course=course,
            avatar_url=optional_text(avatar_url),
        )
        return self.get_user(user_id)

    def delete_user(self, user_id: int) -> None:
        """Delete a user.

        Course memberships and attendance rows of the user are left in place.
        """
        if not self._users.delete_by_id(int(user_id)):
            raise NotFoundError("User not found")
