"""
Flask Application Factory

Creates and configures the Flask application instance.
"""

import logging
from datetime import datetime

import pytz
from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config.database import configure_database, init_database
from config.settings import Settings
from webapp.errors import ApiError
from webapp.routes.auth import auth_bp
from webapp.routes.campus import campus_bp
from webapp.services.session_service import SessionService

logger = logging.getLogger(__name__)

SERVICE_NAME = 'CampusNavigator API'


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            if request.path.startswith('/api/'):
                return jsonify({'ok': False, 'message': error.description}), error.code
            return error
        logger.error(f"Unhandled error on {request.method} {request.path}: {error}", exc_info=True)
        return jsonify({'ok': False, 'message': 'Internal server error'}), 500


def create_app(settings=None):
    """Create and configure the Flask application."""
    settings = settings or Settings.from_env()

    app = Flask(__name__)
    app.config['SETTINGS'] = settings

    configure_database(settings.database_url)
    init_database()

    CORS(app, resources={r'/api/*': {'origins': settings.client_origin}},
         supports_credentials=True)

    app.extensions['session_service'] = SessionService(settings.jwt_secret, settings.cookie_days)

    @app.route('/api/health')
    def health():
        """Liveness check."""
        return jsonify({
            'ok': True,
            'service': SERVICE_NAME,
            'time': datetime.now(pytz.utc).isoformat(),
        })

    app.register_blueprint(auth_bp)
    app.register_blueprint(campus_bp)
    register_error_handlers(app)

    return app
