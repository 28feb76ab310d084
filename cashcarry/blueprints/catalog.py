"""Catalog blueprint: public product list and admin product management."""
from flask import Blueprint, jsonify

from cashcarry.database import get_stores
from cashcarry.decorators.permissions import admin_only
from cashcarry.services import product_service
from cashcarry.utils.request_data import json_body

catalog_bp = Blueprint('catalog', __name__)


@catalog_bp.route('/products')
def list_products():
    """Public product list (id, name, pack_size, price, isSpecial only)."""
    return jsonify(product_service.list_public(get_stores().products))


@catalog_bp.route('/admin/products')
@admin_only
def admin_list_products():
    """Full product records."""
    return jsonify(product_service.list_all(get_stores().products))


@catalog_bp.route('/admin/products', methods=['POST'])
@admin_only
def admin_create_product():
    data = json_body()
    product = product_service.create_product(
        get_stores().products,
        name=data.get('name'),
        pack_size=data.get('pack_size'),
        price=data.get('price'),
        is_special=data.get('isSpecial', False),
    )
    return jsonify(product), 201


@catalog_bp.route('/admin/products/<int:product_id>', methods=['PATCH'])
@admin_only
def admin_update_product(product_id: int):
    """Update price and/or isSpecial; omitted or blank fields are left unchanged."""
    data = json_body()
    kwargs = {}
    if 'price' in data:
        kwargs['price'] = data['price']
    if 'isSpecial' in data:
        kwargs['is_special'] = data['isSpecial']

    product = product_service.update_product(get_stores().products, product_id, **kwargs)
    return jsonify(product)
