"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '0') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Flat-file storage: one JSON array per entity
    DATA_DIR = os.getenv('DATA_DIR', BASE_DIR)
    PRODUCTS_FILE = os.getenv('PRODUCTS_FILE') or os.path.join(DATA_DIR, 'products.json')
    USERS_FILE = os.getenv('USERS_FILE') or os.path.join(DATA_DIR, 'users.json')
    ORDERS_FILE = os.getenv('ORDERS_FILE') or os.path.join(DATA_DIR, 'orders.json')

    # Sessions
    AUTH_HEADER = os.getenv('AUTH_HEADER', 'x-auth-token')
    # 0 (or negative) means tokens never expire (process lifetime only)
    SESSION_TTL_SECONDS = max(0, int(os.getenv('SESSION_TTL_SECONDS', '0')))

    # Error tracking
    SENTRY_DSN = os.getenv('SENTRY_DSN')

    PORT = int(os.getenv('PORT', '4000'))


class TestConfig(Config):
    """Configuration used by the test suite (data files are overridden per test)."""

    TESTING = True
    DEBUG = False
    ENV = 'testing'
    LOG_LEVEL = 'DEBUG'
    SENTRY_DSN = None
