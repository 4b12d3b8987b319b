"""LogIn Command - Check credentials and return the matching user."""

import asyncio
from dataclasses import dataclass

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.domain.entities.user import User
from marketplace.domain.exceptions import AuthenticationError, DomainValidationError
from marketplace.domain.ports.repositories import UserRepository
from marketplace.domain.services.passwords import verify_password
from marketplace.domain.value_objects.user_email import UserEmail


@dataclass(frozen=True)
class LogInCommand(Command[User]):
    email: str
    password: str


class LogInHandler(CommandHandler[User]):
    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    async def execute(self, command: LogInCommand) -> User:
        if not command.email or not command.password:
            raise DomainValidationError("Email and password are required")

        try:
            email = UserEmail(command.email)
        except ValueError as e:
            raise AuthenticationError() from e

        user = await self._user_repository.get_by_email(email)
        # Unknown emails run the same derivation as wrong passwords
        password_hash = user.password_hash if user else None
        valid = await asyncio.to_thread(verify_password, command.password, password_hash)
        if not user or not valid:
            raise AuthenticationError()
        return user
