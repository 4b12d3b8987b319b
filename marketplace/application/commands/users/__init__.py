"""Account commands."""

from .log_in import LogInCommand, LogInHandler
from .sign_up import PASSWORD_MIN_LENGTH, SignUpCommand, SignUpHandler

__all__ = [
    "LogInCommand",
    "LogInHandler",
    "PASSWORD_MIN_LENGTH",
    "SignUpCommand",
    "SignUpHandler",
]
