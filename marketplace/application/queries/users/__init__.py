"""User queries."""

from .get_user import GetUserHandler, GetUserQuery

__all__ = ["GetUserHandler", "GetUserQuery"]
