from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import Role
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._next_id = 1

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_document(self, document: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.document == document), None)

    def list_all(self) -> Sequence[User]:
        return sorted(self._by_id.values(), key=lambda u: u.name)

    def list_by_role(self, role: Role) -> Sequence[User]:
        return [u for u in self.list_all() if u.role == role]

    def create_user(
        self,
        *,
        name: str,
        document: str,
        role: Role,
        course: Optional[str],
        avatar_url: Optional[str],
        user_id: Optional[int] = None,
    ) -> int:
        # user_id lets seed data keep well-known ids.
        uid = int(user_id) if user_id is not None else self._next_id
        self._next_id = max(self._next_id, uid) + 1
        self._by_id[uid] = User(
            user_id=uid,
            name=name,
            document=document,
            role=role,
            course=course,
            avatar_url=avatar_url,
        )
        return uid

    def update_user(
        self,
        *,
        user_id: int,
        name: str,
        document: str,
        role: Role,
        course: Optional[str],
        avatar_url: Optional[str],
    ) -> bool:
        current = self._by_id.get(int(user_id))
        if not current:
            return False
        self._by_id[current.user_id] = replace(
            current, name=name, document=document, role=role, course=course, avatar_url=avatar_url
        )
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self._by_id.pop(int(user_id), None) is not None

    def list_course_groups(self) -> Sequence[str]:
        return sorted({u.course for u in self._by_id.values() if u.role == Role.STUDENT and u.course})
