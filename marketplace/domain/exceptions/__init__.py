"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain logic and caught by presentation layer.
REST routers map them to HTTP status codes; the realtime channel logs them.
"""

from marketplace.domain.exceptions.entity_not_found import EntityNotFoundError
from marketplace.domain.exceptions.access_denied import AccessDeniedError
from marketplace.domain.exceptions.authentication_error import AuthenticationError
from marketplace.domain.exceptions.validation_error import DomainValidationError
from marketplace.domain.exceptions.conflict import ConflictError

__all__ = [
    "EntityNotFoundError",
    "AccessDeniedError",
    "AuthenticationError",
    "DomainValidationError",
    "ConflictError",
]
