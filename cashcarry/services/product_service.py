"""Product catalog service."""
import logging
import math
from typing import Any, Dict, List

from cashcarry.database import JsonStore
from cashcarry.exceptions import NotFoundError, ValidationError
from cashcarry.models import Product

logger = logging.getLogger(__name__)

_MISSING = object()


def to_number(value: Any, field: str = 'value'):
    """
    Convert a JSON value to an int or float.

    Numeric strings are accepted; booleans, NaN and infinities are not.

    Raises:
        ValidationError: If the value is not numeric
    """
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise ValidationError(f'{field} must be a number')
    else:
        raise ValidationError(f'{field} must be a number')

    if isinstance(number, float) and not math.isfinite(number):
        raise ValidationError(f'{field} must be a number')
    return number


def list_public(products: JsonStore) -> List[Dict[str, Any]]:
    """Catalog as exposed to the app (public fields only)."""
    return [Product.public_view(p) for p in products.all()]


def list_all(products: JsonStore) -> List[Dict[str, Any]]:
    """Full stored product records."""
    return products.all()


def create_product(products: JsonStore, name: Any, pack_size: Any, price: Any,
                   is_special: Any = False) -> Dict[str, Any]:
    """
    Create and persist a product with id = max existing id + 1.

    Raises:
        ValidationError: If name, pack_size or price is missing, or price is not numeric
    """
    if not name or not pack_size or price is None:
        raise ValidationError('name, pack_size and price are required')

    price = to_number(price, 'price')
    with products.lock:
        product = Product(
            id=products.next_id(),
            name=str(name),
            pack_size=str(pack_size),
            price=price,
            is_special=bool(is_special),
        )
        record = product.to_record()
        products.append(record)

    logger.info(f"Created product {product.id} '{product.name}' at {product.price}")
    return record


def update_product(products: JsonStore, product_id: Any, price: Any = _MISSING,
                   is_special: Any = _MISSING) -> Dict[str, Any]:
    """
    Patch a product's price and/or special flag in place.

    A price that is omitted, null or "" is left unchanged; is_special is only
    applied when it is a boolean.

    Raises:
        NotFoundError: If the product doesn't exist
        ValidationError: If price is present but not numeric
    """
    with products.lock:
        record = products.get(product_id)
        if record is None:
            raise NotFoundError('Product not found')

        changes = {}
        if price is not _MISSING and price is not None and price != '':
            changes['price'] = to_number(price, 'price')
        if isinstance(is_special, bool):
            changes['isSpecial'] = is_special

        record.update(changes)
        products.save()

    if changes:
        logger.info(f"Updated product {product_id}: {changes}")
    return record
