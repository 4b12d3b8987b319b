"""
UserId Value Object
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserId:
    value: str  # user_id, canonical UUID string

    def __post_init__(self):
        if not self.value:
            raise ValueError("UserId cannot be empty")

        # Ids arrive from the session, the URL and the database; compare canonical forms only
        object.__setattr__(self, "value", str(UUID(str(self.value))))

    def __str__(self) -> str:
        return self.value
