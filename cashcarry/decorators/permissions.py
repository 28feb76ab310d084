"""
Permission decorators for role-based access control.

Missing token, unknown token and insufficient role all produce the same
403 response.
"""

from functools import wraps
from typing import Iterable, Optional
from flask import g

from cashcarry.exceptions import AuthorizationError
from cashcarry.models import User, UserRole


def has_capability(user: Optional[User], allowed_roles: Iterable[UserRole]) -> bool:
    """True if the user exists and holds one of the allowed roles."""
    if user is None or user.role is None:
        return False
    return user.role in set(allowed_roles)


def require_role(*allowed_roles, message='Forbidden'):
    """
    Decorator to restrict access to specific roles.

    Usage:
        @require_role(UserRole.ADMIN)
        @require_role('admin', 'rep')

    Args:
        *allowed_roles: UserRole members or their string values. Unknown role
            names raise ValueError when the decorator is applied.
        message: Error message for the 403 response

    Returns:
        Decorator function
    """
    roles = frozenset(UserRole(r) for r in allowed_roles)
    if not roles:
        raise ValueError('require_role needs at least one role')

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not has_capability(g.get('user'), roles):
                raise AuthorizationError(message)
            return f(*args, **kwargs)

        return decorated_function
    return decorator


def admin_only(f):
    """
    Shortcut decorator for admin-only routes.

    Usage:
        @admin_only
        def create_product():
            ...
    """
    return require_role(UserRole.ADMIN, message='Admin only')(f)


def admin_or_rep(f):
    """
    Shortcut decorator for admin or rep access.

    Usage:
        @admin_or_rep
        def list_orders():
            ...
    """
    return require_role(UserRole.ADMIN, UserRole.REP, message='Admin or rep only')(f)
