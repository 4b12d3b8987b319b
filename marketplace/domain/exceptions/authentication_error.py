"""
AuthenticationError - Raised when credentials do not identify a user.
Maps to: HTTP 401 Unauthorized
"""


class AuthenticationError(Exception):
    """Raised for an unknown email or a wrong password (same message for both)"""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)
