"""Middleware for token authentication."""
from functools import wraps
from flask import g, request, current_app
from cashcarry.exceptions import AuthenticationError
from cashcarry.services.session_service import get_sessions


def get_request_token():
    """Token supplied by the caller in the auth header, if any."""
    return request.headers.get(current_app.config.get('AUTH_HEADER', 'x-auth-token')) or None


def load_current_user():
    """
    Load the caller's identity into g (Flask's per-request global).

    Called before each request. Sets g.auth_token and g.user; g.user is None
    when the token is missing, unknown, expired or its user is gone.
    """
    g.auth_token = get_request_token()
    g.user = get_sessions().resolve(g.auth_token) if g.auth_token else None


def require_login(f):
    """
    Decorator: Require a valid token.

    Raises AuthenticationError (401) if no user could be resolved.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if g.get('user') is None:
            raise AuthenticationError('Not authenticated')
        return f(*args, **kwargs)
    return decorated_function
