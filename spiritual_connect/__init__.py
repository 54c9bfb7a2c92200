"""
Spiritual Connect Application Package

FLOW OVERVIEW
- create_app(test_config=None)
  • Build Flask app, apply config (test or env-based), init extensions (DB, Mail).
  • Pick the storage backend and build the speech/categorizer clients.
  • Register blueprints: main (/), auth (/api/auth), api (/api), contributions
    (/api/contributions), services (/api).
  • Register global error handlers, request metrics and the init-db/seed-db commands.
"""

__version__ = '1.0.0'

import time

import click
from flask import Flask, g, request

from .config import Config
from .models import db
from .routes import api_bp, auth_bp, contributions_bp, main_bp, services_bp
from .storage import init_storage, seed_sample_data
from .utils.categorizer import build_categorizer
from .utils.notifications import mail
from .utils.prom_metrics import observe_request
from .utils.speech import build_synthesizer


def create_app(test_config=None):
    """Application factory pattern for production deployment"""
    app = Flask(__name__)

    # Configuration
    if test_config:
        # Use test configuration if provided
        app.config.update(test_config)
    else:
        # Use environment-based configuration
        app.config.from_object(Config())

    # Initialize extensions
    db.init_app(app)
    mail.init_app(app)
    init_storage(app)
    app.extensions['speech'] = build_synthesizer(app.config)
    app.extensions['categorizer'] = build_categorizer(app.config)

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(contributions_bp, url_prefix='/api/contributions')
    app.register_blueprint(services_bp, url_prefix='/api')

    # Register error handlers
    from .utils.error_handlers import register_error_handlers
    register_error_handlers(app)

    _register_request_metrics(app)
    _register_commands(app)

    return app


def _register_request_metrics(app):
    @app.before_request
    def start_timer():
        g.request_started_at = time.time()

    @app.after_request
    def record_request(response):
        started_at = g.pop('request_started_at', None)
        if started_at is not None:
            observe_request(request.endpoint or 'unknown', response.status_code, time.time() - started_at)
        return response


def _register_commands(app):
    @app.cli.command('init-db')
    def init_db_command():
        """Create database tables."""
        db.create_all()
        click.echo('Database tables created.')

    @app.cli.command('seed-db')
    @click.option('--with-demo-user', is_flag=True, help='Also create test@example.com with a contribution.')
    def seed_db_command(with_demo_user):
        """Reset storage and load the sample festivals, rituals and bhajans."""
        storage = app.extensions['storage']
        storage.reset()
        counts = seed_sample_data(storage, with_demo_user=with_demo_user)
        for table, count in counts.items():
            click.echo(f'{table}: {count}')
