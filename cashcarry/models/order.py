"""Order model."""
import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]


class OrderStatus(str, enum.Enum):
    """Order lifecycle status."""
    PENDING = 'pending'
    PACKED = 'packed'
    OUT_FOR_DELIVERY = 'out_for_delivery'
    DELIVERED = 'delivered'
    CANCELLED = 'cancelled'

    @classmethod
    def values(cls) -> List[str]:
        return [s.value for s in cls]


@dataclass
class OrderLine:
    """Priced line item (price snapshot taken at order time)."""

    product_id: int
    name: str
    qty: Any
    price: Number
    # numeric form of qty used for pricing; qty itself is stored as given
    quantity: Optional[Number] = None

    @property
    def line_total(self) -> Number:
        quantity = self.qty if self.quantity is None else self.quantity
        return self.price * quantity

    def to_record(self) -> Dict[str, Any]:
        return {
            'productId': self.product_id,
            'name': self.name,
            'qty': self.qty,
            'price': self.price,
            'lineTotal': self.line_total,
        }


@dataclass
class Order:
    """Customer order."""

    id: int
    customer_name: str
    created_at: datetime
    items: List[OrderLine] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    note: str = ''
    location: Any = None
    user: Optional[Dict[str, Any]] = None

    @property
    def total(self) -> Number:
        total = 0
        for line in self.items:
            total += line.line_total
        return total

    def to_record(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'status': self.status.value,
            'customerName': self.customer_name,
            'note': self.note,
            'location': self.location,
            'user': dict(self.user) if self.user else None,
            'items': [line.to_record() for line in self.items],
            'total': self.total,
            'createdAt': format_timestamp(self.created_at),
        }


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a Z suffix."""
    return value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
