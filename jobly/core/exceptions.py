"""
Typed application errors.

Each error carries the HTTP status the transport layer responds with.
They are raised where a problem is detected and rendered by the exception
handler registered in main.py as {"error": {"message": ..., "status": ...}}.
"""


class JoblyError(Exception):
    """Base class for all errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str = "Internal server error", status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(JoblyError):
    """Caller input is empty, malformed or internally inconsistent."""

    status_code = 400

    def __init__(self, message: str = "Bad request", status_code: int = None):
        super().__init__(message, status_code)


class AuthenticationError(JoblyError):
    """Credential missing, malformed, unverifiable or expired."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", status_code: int = None):
        super().__init__(message, status_code)


class AuthorizationError(JoblyError):
    """Credential is valid but lacks the required privilege."""

    status_code = 403

    def __init__(self, message: str = "Forbidden", status_code: int = None):
        super().__init__(message, status_code)


class NotFoundError(JoblyError):
    status_code = 404

    def __init__(self, message: str = "Not found", status_code: int = None):
        super().__init__(message, status_code)


class ConflictError(JoblyError):
    status_code = 409

    def __init__(self, message: str = "Conflict", status_code: int = None):
        super().__init__(message, status_code)
