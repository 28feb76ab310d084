"""
Authentication service for user management.

Handles account creation, registration and phone/password login.
"""
import logging
from typing import Any, Tuple

from cashcarry.database import JsonStore
from cashcarry.exceptions import AuthenticationError, ValidationError
from cashcarry.models import User, UserRole
from cashcarry.services.session_service import SessionRegistry

logger = logging.getLogger(__name__)


def create_user(users: JsonStore, name: Any, phone: Any, password: Any,
                role: UserRole = UserRole.CUSTOMER) -> User:
    """
    Create and persist a user.

    Args:
        users: Users store
        name, phone, password: Required, coerced to strings
        role: Role of the new account

    Returns:
        User: The created user

    Raises:
        ValidationError: If a field is missing or the phone is already registered
    """
    if not name or not phone or not password:
        raise ValidationError('name, phone, password are required')

    phone = str(phone)
    with users.lock:
        if users.find(lambda u: u.get('phone') == phone):
            logger.warning(f"Registration rejected, phone already registered: {phone}")
            raise ValidationError('Phone already registered')

        user = User(
            id=users.next_id(),
            name=str(name),
            phone=phone,
            password=str(password),
            role=UserRole(role),
        )
        users.append(user.to_record())

    logger.info(f"Created {user.role_name} user {user.id} ({phone})")
    return user


def register_user(users: JsonStore, sessions: SessionRegistry,
                  name: Any, phone: Any, password: Any) -> Tuple[str, User]:
    """Register a new customer and issue a token for it."""
    user = create_user(users, name, phone, password, UserRole.CUSTOMER)
    token = sessions.create_token(user.id)
    return token, user


def authenticate(users: JsonStore, sessions: SessionRegistry,
                 phone: Any, password: Any) -> Tuple[str, User]:
    """
    Log a user in by phone and password.

    Raises:
        ValidationError: If phone or password is missing
        AuthenticationError: If no user matches
    """
    if not phone or not password:
        raise ValidationError('phone and password required')

    phone = str(phone)
    password = str(password)
    record = users.find(
        lambda u: u.get('id') is not None and u.get('phone') == phone and u.get('password') == password
    )
    if record is None:
        logger.warning(f"Failed login for phone {phone}")
        raise AuthenticationError('Invalid phone or password')

    user = User.from_record(record)
    token = sessions.create_token(user.id)
    logger.info(f"User {user.id} logged in")
    return token, user
