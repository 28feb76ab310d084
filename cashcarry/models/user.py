"""User model."""
import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional


class UserRole(str, enum.Enum):
    """Closed set of account roles."""
    CUSTOMER = 'customer'
    REP = 'rep'
    ADMIN = 'admin'

    @classmethod
    def parse(cls, value: Any) -> Optional['UserRole']:
        """Return the matching role, or None for anything unrecognized."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass
class User:
    """
    Account record.

    Passwords are stored and compared in cleartext; the users file is the
    only credential store.
    """

    id: int
    name: str
    phone: str
    password: str
    role: Optional[UserRole] = UserRole.CUSTOMER

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'User':
        return cls(
            id=record.get('id'),
            name=record.get('name'),
            phone=record.get('phone'),
            password=record.get('password'),
            role=UserRole.parse(record.get('role')),
        )

    @property
    def role_name(self) -> Optional[str]:
        return self.role.value if self.role else None

    def to_record(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'phone': self.phone,
            'password': self.password,
            'role': self.role_name,
        }

    def to_public(self) -> Dict[str, Any]:
        """User without the password field."""
        return {
            'id': self.id,
            'name': self.name,
            'phone': self.phone,
            'role': self.role_name,
        }

    def snapshot(self) -> Dict[str, Any]:
        """Copy of the identity fields embedded into orders."""
        return self.to_public()
