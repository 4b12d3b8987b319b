"""
SignUp Command - Register a new account.

Rules:
- name: trimmed, at least 2 characters (User.create)
- email: trimmed, lower-cased, must look like an address, unique
- password: at least 6 characters, stored only as a salted scrypt hash
"""

import asyncio
import logging
from dataclasses import dataclass

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.domain.entities.user import User
from marketplace.domain.exceptions import ConflictError, DomainValidationError
from marketplace.domain.ports.repositories import UserRepository
from marketplace.domain.services.passwords import hash_password
from marketplace.domain.value_objects.user_email import UserEmail

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6


@dataclass(frozen=True)
class SignUpCommand(Command[User]):
    name: str
    email: str
    password: str


class SignUpHandler(CommandHandler[User]):
    _user_repository: UserRepository

    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    async def execute(self, command: SignUpCommand) -> User:
        try:
            email = UserEmail(command.email)
        except ValueError as e:
            raise DomainValidationError("Please enter a valid email address") from e

        if len(command.password or "") < PASSWORD_MIN_LENGTH:
            raise DomainValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )

        if await self._user_repository.get_by_email(email):
            raise ConflictError("Email already in use")

        password_hash = await asyncio.to_thread(hash_password, command.password)
        user = User.create(name=command.name, email=email, password_hash=password_hash)
        # A concurrent signup with the same email surfaces as ConflictError here
        await self._user_repository.create(user)

        logger.info(f"Registered user {user.id.value}")
        return user
