"""
UserEmail Value Object - Wraps user email with validation.
"""

import re
from dataclasses import dataclass

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


@dataclass(frozen=True)
class UserEmail:
    value: str  # user_email, trimmed and lower-cased

    def __post_init__(self):
        normalized = (self.value or "").strip().lower()
        if not EMAIL_PATTERN.match(normalized):
            raise ValueError(f"Invalid user email: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
