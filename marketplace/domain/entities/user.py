"""
User Entity - A marketplace account (buyer and/or seller).
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4
from marketplace.domain.exceptions.validation_error import DomainValidationError
from marketplace.domain.value_objects.user_id import UserId
from marketplace.domain.value_objects.user_email import UserEmail

NAME_MIN_LENGTH = 2


@dataclass
class User:
    id: UserId
    email: UserEmail
    name: str
    password_hash: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(cls, name: str, email: UserEmail, password_hash: str) -> User:
        """Factory method for a new account; the password must already be hashed."""
        name = (name or "").strip()
        if len(name) < NAME_MIN_LENGTH:
            raise DomainValidationError(
                f"Name must be at least {NAME_MIN_LENGTH} characters"
            )
        now = datetime.now(timezone.utc)
        return cls(
            id=UserId(str(uuid4())),
            email=email,
            name=name,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
