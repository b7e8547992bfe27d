from __future__ import annotations

from dataclasses import dataclass

from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import BasePermission

from users.models import User


SYSTEM_ACTOR_NAME = "System"


@dataclass(frozen=True)
class Actor:
    """Who is performing an operation, as established by the verified token."""

    user_id: int | None
    role: str
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role == User.Role.ADMIN

    @property
    def is_system(self) -> bool:
        return self.user_id is None

    def owns(self, owner_id) -> bool:
        return self.user_id is not None and self.user_id == owner_id

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(user_id=user.pk, role=user.role, name=user.full_name or user.email)

    @classmethod
    def from_request(cls, request) -> "Actor":
        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            raise NotAuthenticated("Not authorized, no token")
        return cls.from_user(user)

    @classmethod
    def system(cls) -> "Actor":
        return cls(user_id=None, role=User.Role.ADMIN, name=SYSTEM_ACTOR_NAME)


class IsAdminRole(BasePermission):
    message = "Not authorized as admin"

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role == User.Role.ADMIN)
