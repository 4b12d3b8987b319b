"""User DTOs for API responses."""

from datetime import datetime

from marketplace.application.dto.base import CamelModel
from marketplace.domain.entities.user import User


class UserSummaryDTO(CamelModel):
    """Public projection of a user: what a chat counterpart or buyer may see."""

    id: str
    name: str
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "UserSummaryDTO":
        return cls(id=user.id.value, name=user.name, email=user.email.value)


class UserProfileDTO(UserSummaryDTO):
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserProfileDTO":
        return cls(
            id=user.id.value,
            name=user.name,
            email=user.email.value,
            created_at=user.created_at,
        )
