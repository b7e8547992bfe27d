"""Small builders shared by the test modules."""

from __future__ import annotations

from decimal import Decimal
from itertools import count

from catalog.models import Service
from users.models import User

_sequence = count(1)


def make_user(role: str = User.Role.USER, **extra) -> User:
    n = next(_sequence)
    defaults = {
        "email": f"user{n}@example.com",
        "full_name": f"Test User {n}",
        "password": "StrongPass123",
        "phone": f"98765{n:05d}",
        "role": role,
    }
    defaults.update(extra)
    return User.objects.create_user(**defaults)


def make_admin(**extra) -> User:
    return make_user(role=User.Role.ADMIN, is_staff=True, **extra)


def make_service(**extra) -> Service:
    defaults = {
        "category": "driving-licence",
        "service_id": "A",
        "name": "Learner Licence",
        "description": "Apply for new learner driving licence",
        "fee": Decimal("500.00"),
        "processing_time": "3-5 days",
    }
    defaults.update(extra)
    return Service.objects.create(**defaults)
