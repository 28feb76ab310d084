import json
import pytest

from config import TestConfig
from cashcarry import create_app
from cashcarry.database import get_stores
from cashcarry.models import UserRole
from cashcarry.services.auth_service import create_user
from cashcarry.services.session_service import get_sessions


def write_json(path, data):
    path.write_text(json.dumps(data), encoding='utf-8')


@pytest.fixture(scope='function')
def data_dir(tmp_path):
    """Directory holding the products/users/orders files for one test."""
    return tmp_path


@pytest.fixture(scope='function')
def seed_products(data_dir):
    """Catalog written to disk before the app starts."""
    products = [
        {'id': 1, 'name': 'Sunflower Oil', 'pack_size': '6 x 2L', 'price': 10.0, 'isSpecial': False},
        {'id': 2, 'name': 'Maize Meal', 'pack_size': '10kg', 'price': 7.5, 'isSpecial': True,
         'supplierCode': 'MM-10'},
    ]
    write_json(data_dir / 'products.json', products)
    return products


@pytest.fixture(scope='function')
def app(data_dir, seed_products):
    """Create application instance for testing."""
    app = create_app(TestConfig, overrides={
        'DATA_DIR': str(data_dir),
        'PRODUCTS_FILE': str(data_dir / 'products.json'),
        'USERS_FILE': str(data_dir / 'users.json'),
        'ORDERS_FILE': str(data_dir / 'orders.json'),
    })
    return app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


def _user_with_token(app, name, phone, role):
    with app.app_context():
        user = create_user(get_stores().users, name, phone, 'secret', role)
        token = get_sessions().create_token(user.id)
    return user, token


@pytest.fixture(scope='function')
def admin(app):
    """(user, token) for an admin account."""
    return _user_with_token(app, 'Admin', '0100000001', UserRole.ADMIN)


@pytest.fixture(scope='function')
def rep(app):
    """(user, token) for a rep account."""
    return _user_with_token(app, 'Rep', '0100000002', UserRole.REP)


@pytest.fixture(scope='function')
def customer(app):
    """(user, token) for a customer account."""
    return _user_with_token(app, 'Thabo', '0820000001', UserRole.CUSTOMER)


@pytest.fixture(scope='function')
def other_customer(app):
    """(user, token) for a second customer account."""
    return _user_with_token(app, 'Lerato', '0820000002', UserRole.CUSTOMER)
