"""
Client-side session errors.
"""


class AccessDenied(RuntimeError):
    """No valid token is available for an operation that requires one."""

    def __init__(self, message="Token not valid. Access denied"):
        super().__init__(message)
