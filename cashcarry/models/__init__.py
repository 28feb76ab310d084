"""Models package - exports the entity models and enums."""
from cashcarry.models.product import Product
from cashcarry.models.user import User, UserRole
from cashcarry.models.order import Order, OrderLine, OrderStatus
from cashcarry.models.session import Session

__all__ = [
    'Product',
    'User', 'UserRole',
    'Order', 'OrderLine', 'OrderStatus',
    'Session',
]
