"""Orders blueprint: order placement, listings and admin status updates."""
from flask import Blueprint, jsonify, g

from cashcarry.decorators.permissions import admin_only, admin_or_rep
from cashcarry.middleware import require_login
from cashcarry.services.order_service import get_order_engine
from cashcarry.utils.request_data import json_body

orders_bp = Blueprint('orders', __name__)


@orders_bp.route('/orders', methods=['POST'])
def create_order():
    """
    Place an order. A token is optional; when present the order is linked
    to the caller.
    """
    data = json_body()
    order = get_order_engine().place_order(
        data.get('items'),
        customer_name=data.get('customerName'),
        note=data.get('note'),
        location=data.get('location'),
        user=g.get('user'),
    )
    return jsonify(order), 201


@orders_bp.route('/orders')
@admin_or_rep
def list_orders():
    """All orders (admin / rep only)."""
    return jsonify(get_order_engine().list_all())


@orders_bp.route('/my-orders')
@require_login
def my_orders():
    """Orders placed by the logged-in user."""
    return jsonify(get_order_engine().list_for_user(g.user.id))


@orders_bp.route('/admin/orders/<int:order_id>/status', methods=['PATCH'])
@admin_only
def update_order_status(order_id: int):
    data = json_body()
    order = get_order_engine().update_status(order_id, data.get('status'))
    return jsonify(order)
