"""Main blueprint with liveness and health check endpoints."""
from flask import Blueprint, jsonify
from cashcarry.database import get_stores

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Service liveness message."""
    return jsonify({'message': 'Rand Cash & Carry API is running'})


@main_bp.route('/health')
def health():
    """
    Health check endpoint with in-memory collection sizes.

    Returns:
        200: Healthy
    """
    stores = get_stores()
    return jsonify({
        'status': 'healthy',
        'products': len(stores.products),
        'users': len(stores.users),
        'orders': len(stores.orders),
    }), 200
