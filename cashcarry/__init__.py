"""Flask application factory."""
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
import logging
import os


def _configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    logging.getLogger('cashcarry').setLevel(level)
    app.logger.setLevel(level)


def create_app(config_object='config.Config', overrides=None):
    """
    Create and configure the Flask application.

    Args:
        config_object: Import path or class of the configuration
        overrides: Optional dict applied after the config object (tests use it
            to point the data files at a temporary directory)
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = False

    _configure_logging(app)

    # Error tracking in production
    if app.config.get('SENTRY_DSN') and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get('ENV'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Composition root: stores, sessions, order engine
    from cashcarry.database import init_db
    from cashcarry.services.session_service import init_sessions
    from cashcarry.services.order_service import init_orders

    stores = init_db(app)
    init_sessions(app, stores.users)
    init_orders(app, stores.orders, stores.products)

    from cashcarry.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    from cashcarry.middleware import load_current_user

    @app.before_request
    def before_request_handler():
        """Load the caller's identity for each request."""
        load_current_user()

    # Error Handlers
    from cashcarry.exceptions import ApiError

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        """Handle custom application exceptions."""
        app.logger.warning(f"ApiError [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'status': 'error', 'message': error.name}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        app.logger.error(f"Unhandled Exception: {error}", exc_info=error)
        return jsonify({'status': 'error', 'message': 'Internal Server Error'}), 500

    # Register blueprints
    from cashcarry.blueprints.main import main_bp
    from cashcarry.blueprints.auth import auth_bp
    from cashcarry.blueprints.catalog import catalog_bp
    from cashcarry.blueprints.orders import orders_bp
    from cashcarry.blueprints.metrics import metrics_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(metrics_bp)

    from cashcarry.cli_commands import init_cli_commands
    init_cli_commands(app)

    app.logger.info(
        f"Data files: products={app.config['PRODUCTS_FILE']} "
        f"users={app.config['USERS_FILE']} orders={app.config['ORDERS_FILE']}"
    )

    return app
