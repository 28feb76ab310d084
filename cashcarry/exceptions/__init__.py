"""Custom exceptions for the Cash & Carry ordering API."""


class ApiError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['status'] = 'error'
        return rv


class ValidationError(ApiError):
    """Raised for missing or malformed request fields."""
    def __init__(self, message, payload=None):
        super().__init__(message, 400, payload)


class AuthenticationError(ApiError):
    """Raised when a token is required but missing or invalid, or credentials don't match."""
    def __init__(self, message="Not authenticated"):
        super().__init__(message, 401)


class AuthorizationError(ApiError):
    """Raised when the caller lacks the role for an action."""
    def __init__(self, message="Forbidden"):
        super().__init__(message, 403)


class NotFoundError(ApiError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)
