"""
Flask application factory.

Creates and configures the Flask app, registers all blueprints.
"""
from flask import Flask, g, request, jsonify, redirect

from outreach.errors import ServiceError
from outreach.services.circuit_breaker import CircuitOpenError

OPEN_PATHS = {'/health', '/login', '/signup', '/logout'}
# Backend-path procedures answer like the JSON API
API_PATHS = ('/api/', '/analyze', '/create-proposal', '/chat')


def _is_open(path):
    return (
        path in OPEN_PATHS
        or path.startswith('/api/auth/')
        or path.startswith('/static/')
    )


def _wants_json(path):
    return path.startswith(API_PATHS) or request.is_json


def create_app():
    """Create and configure the Flask application."""
    from outreach.config import SECRET_KEY
    from outreach.logging_config import configure_logging

    app = Flask(__name__)

    configure_logging(app)

    # Secret key for sessions
    app.secret_key = SECRET_KEY

    # ── Session gate ────────────────────────────────────────────────────
    from outreach.auth import load_current_user

    @app.before_request
    def require_login():
        load_current_user()
        if _is_open(request.path):
            return
        if g.user is not None:
            return
        if _wants_json(request.path):
            return jsonify({'error': 'Authentication required'}), 401
        return redirect('/login')

    # ── Errors ──────────────────────────────────────────────────────────
    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        return jsonify({'error': e.message}), e.status_code

    @app.errorhandler(CircuitOpenError)
    def handle_circuit_open(e):
        return jsonify({'error': str(e), 'service': e.name}), 503

    # Register blueprints
    from outreach.routes.auth import bp as auth_bp
    from outreach.routes.navigation import bp as navigation_bp
    from outreach.routes.dashboard import bp as dashboard_bp
    from outreach.routes.analysis import bp as analysis_bp
    from outreach.routes.drafts import bp as drafts_bp
    from outreach.routes.campaigns import bp as campaigns_bp
    from outreach.routes.messages import bp as messages_bp
    from outreach.routes.settings import bp as settings_bp
    from outreach.routes.backend import bp as backend_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(navigation_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(analysis_bp)
    app.register_blueprint(drafts_bp)
    app.register_blueprint(campaigns_bp)
    app.register_blueprint(messages_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(backend_bp)

    # Initialize circuit breakers for the remote procedures
    from outreach.extensions import redis_client
    from outreach.services.circuit_breaker import init_breakers
    init_breakers(redis_client)

    # Import models so Base.metadata knows about them (required for SQLAlchemy).
    # Schema is managed by Alembic; there is no init_db() call.
    from outreach.database import import_models
    import_models()

    return app
