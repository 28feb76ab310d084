"""
Order engine.
Handles order placement (pricing, id assignment, persistence) and status updates.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from flask import Flask, current_app

from cashcarry.database import JsonStore
from cashcarry.exceptions import NotFoundError, ValidationError
from cashcarry.metrics import order_status_changes_total, orders_placed_total
from cashcarry.models import Order, OrderLine, OrderStatus, User
from cashcarry.services.product_service import to_number

logger = logging.getLogger(__name__)

UNKNOWN_CUSTOMER = 'Unknown customer'


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderEngine:
    """
    Places and updates orders against the product catalog.

    The next order id is taken from the persisted orders once, at construction,
    and kept in memory afterwards: edits to the orders file never cause an id
    to be handed out twice.
    """

    def __init__(self, orders: JsonStore, products: JsonStore,
                 clock: Callable[[], datetime] = _utcnow):
        self.orders = orders
        self.products = products
        self._clock = clock
        self._next_order_id = orders.next_id()

    @property
    def next_order_id(self) -> int:
        return self._next_order_id

    def _price_lines(self, items: List[Any]) -> List[OrderLine]:
        """Price every line against the catalog; any unknown product rejects the whole order."""
        lines = []
        with self.products.lock:
            for item in items:
                product_id = item.get('productId') if isinstance(item, dict) else None
                product = self.products.get(product_id)
                if product is None:
                    raise ValidationError(
                        f'Invalid productId: {product_id}',
                        payload={'productId': product_id}
                    )

                quantity = to_number(item.get('qty'), 'qty')
                price = to_number(product.get('price', 0), 'price')
                lines.append(OrderLine(
                    product_id=product['id'],
                    name=product.get('name'),
                    qty=item.get('qty'),
                    price=price,
                    quantity=quantity,
                ))
        return lines

    def place_order(self, items: Any, customer_name: Optional[str] = None,
                    note: Optional[str] = None, location: Any = None,
                    user: Optional[User] = None) -> Dict[str, Any]:
        """
        Validate, price and persist a new order.

        Args:
            items: List of {productId, qty}
            customer_name: Defaults to the user's name, else 'Unknown customer'
            note: Free text, defaults to ''
            location: Free-form, defaults to None
            user: Acting user resolved from the caller's token, if any

        Returns:
            dict: The stored order record

        Raises:
            ValidationError: If items is empty/not a list, a productId is
                unknown, or a qty is not numeric. Nothing is stored and no id
                is consumed in that case.
        """
        if not items or not isinstance(items, list):
            raise ValidationError('No items in order')

        lines = self._price_lines(items)

        with self.orders.lock:
            order = Order(
                id=self._next_order_id,
                status=OrderStatus.PENDING,
                customer_name=customer_name or (user.name if user else UNKNOWN_CUSTOMER),
                note=note or '',
                location=location or None,
                user=user.snapshot() if user else None,
                items=lines,
                created_at=self._clock(),
            )
            self._next_order_id += 1

            record = order.to_record()
            self.orders.append(record)
        orders_placed_total.inc()

        logger.info(f"New order {order.id}: {len(lines)} lines, total {record['total']}")
        return record

    def update_status(self, order_id: Any, new_status: Any) -> Dict[str, Any]:
        """
        Overwrite an order's status.

        Raises:
            ValidationError: If new_status isn't a recognized status (payload lists valid ones)
            NotFoundError: If the order doesn't exist
        """
        if not isinstance(new_status, str) or new_status not in OrderStatus.values():
            raise ValidationError('Invalid status', payload={'valid': OrderStatus.values()})

        with self.orders.lock:
            record = self.orders.get(order_id)
            if record is None:
                raise NotFoundError('Order not found')

            previous = record.get('status')
            record['status'] = new_status
            self.orders.save()
        order_status_changes_total.labels(new_status).inc()

        logger.info(f"Order {order_id} status {previous} -> {new_status}")
        return record

    def list_for_user(self, user_id: int) -> List[Dict[str, Any]]:
        """Orders whose snapshotted user id matches, oldest first."""
        return self.orders.filter(
            lambda o: isinstance(o.get('user'), dict) and o['user'].get('id') == user_id
        )

    def list_all(self) -> List[Dict[str, Any]]:
        return self.orders.all()


def init_orders(app: Flask, orders: JsonStore, products: JsonStore) -> OrderEngine:
    """Create the order engine and attach it to the app."""
    engine = OrderEngine(orders, products)
    app.extensions['cashcarry.orders'] = engine
    return engine


def get_order_engine() -> OrderEngine:
    """Get the order engine of the current application."""
    return current_app.extensions['cashcarry.orders']
