"""
AccessDeniedError - Raised when the caller plays no permitted role for the action
(e.g. a non-seller asking for a product's chat list).
Maps to: HTTP 403 Forbidden
"""


class AccessDeniedError(Exception):
    """Raised when the caller is not allowed to act on a resource"""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message)
