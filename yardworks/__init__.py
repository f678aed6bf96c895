import os
import logging
from flask import Flask, current_app, jsonify, redirect, request, url_for
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from dotenv import load_dotenv
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .config import CONFIGS, ProdConfig
from .errors import YardworksError, validation_details

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()

STORE_KEY = 'yardworks.store'


def get_store():
    """Return the record store bound to the current application."""
    return current_app.extensions[STORE_KEY]


def build_store(app: Flask):
    options = dict(
        quote_prefix=app.config['QUOTE_NUMBER_PREFIX'],
        validity_days=app.config['QUOTE_VALIDITY_DAYS'],
    )
    backend = app.config['STORE_BACKEND']
    if backend == 'memory':
        from .store import MemoryStore
        return MemoryStore(**options)
    if backend == 'sql':
        from .sql_store import SqlStore
        return SqlStore(**options)
    raise ValueError(f'Unknown STORE_BACKEND {backend!r}')


def create_app(config_name: str | None = None, store=None) -> Flask:
    """Application factory with environment based configuration.

    ``store`` replaces the configured record store, which lets tests give
    every app its own isolated instance.
    """
    load_dotenv()

    app = Flask(__name__, instance_relative_config=True)
    os.makedirs(app.instance_path, exist_ok=True)

    # Pick configuration
    env = config_name or os.getenv('ENV') or os.getenv('FLASK_ENV') or 'production'
    app.config.from_object(CONFIGS.get(env, ProdConfig))

    # Initialise logging
    level = logging.DEBUG if app.debug else getattr(
        logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO)
    logging.basicConfig(level=level)

    db.init_app(app)
    migrate.init_app(app, db)

    # Ensure models loaded so tables can be created
    from yardworks import models  # noqa
    if app.config['STORE_BACKEND'] == 'sql':
        with app.app_context():
            db.create_all()

    app.extensions[STORE_KEY] = store if store is not None else build_store(app)

    @app.route('/')
    def index():
        return redirect(url_for('reports.dashboard_stats_view'))

    @app.errorhandler(YardworksError)
    def yardworks_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(ValidationError)
    def invalid_payload(e):
        return jsonify(error='Invalid data', details=validation_details(e)), 400

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify(error=e.name), e.code

    @app.errorhandler(Exception)
    def server_error(e):
        logging.exception("unhandled error on %s %s", request.method, request.path)
        view = app.view_functions.get(request.endpoint)
        message = getattr(view, 'failure_message', 'Internal server error')
        return jsonify(error=message), 500

    from yardworks.customers.routes import bp as customers_bp
    from yardworks.quotes.routes import bp as quotes_bp, pages_bp
    from yardworks.reports.routes import bp as reports_bp
    from yardworks.seed import seed_data_command, seed_sample_data

    app.register_blueprint(customers_bp, url_prefix='/api/customers')
    app.register_blueprint(quotes_bp, url_prefix='/api/quotes')
    app.register_blueprint(reports_bp, url_prefix='/api')
    app.register_blueprint(pages_bp, url_prefix='/quotes')
    app.cli.add_command(seed_data_command)

    if app.config['SEED_SAMPLE_DATA']:
        with app.app_context():
            seed_sample_data(get_store())

    return app
