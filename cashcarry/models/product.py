"""Product model."""
from dataclasses import dataclass
from typing import Any, Dict, Union

# Fields exposed by the public catalog
PUBLIC_FIELDS = ('id', 'name', 'pack_size', 'price', 'isSpecial')


@dataclass
class Product:
    """Catalog product (stored as a plain JSON object)."""

    id: int
    name: str
    pack_size: str
    price: Union[int, float]
    is_special: bool = False

    def to_record(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'pack_size': self.pack_size,
            'price': self.price,
            'isSpecial': self.is_special,
        }

    @staticmethod
    def public_view(record: Dict[str, Any]) -> Dict[str, Any]:
        """Project a stored record onto the public catalog fields."""
        view = {field: record.get(field) for field in PUBLIC_FIELDS}
        view['isSpecial'] = bool(view['isSpecial'])
        return view
