"""
ChatId Value Object - UUID wrapper for chat (conversation) identity.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class ChatId:
    value: str  # chat_id, canonical UUID string

    def __post_init__(self):
        if not self.value:
            raise ValueError("Chat ID cannot be empty")
        object.__setattr__(self, "value", str(UUID(str(self.value))))

    def __str__(self) -> str:
        return self.value
