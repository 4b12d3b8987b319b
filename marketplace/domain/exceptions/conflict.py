"""
ConflictError - Raised when a write collides with an existing record
(duplicate chat for a product/buyer pair, duplicate email).
Maps to: HTTP 409 Conflict
"""


class ConflictError(Exception):
    """Raised when a uniqueness constraint rejects a write"""

    def __init__(self, message: str = "The resource already exists."):
        super().__init__(message)
