"""
Authentication Routes

Handles user registration, login/logout and session lookup.
"""

from flask import Blueprint, current_app, jsonify, request

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def _session_service():
    return current_app.extensions['session_service']


def set_auth_cookie(response, token):
    """Attach the session token cookie to a response."""
    settings = current_app.config['SETTINGS']
    response.set_cookie(
        settings.cookie_name,
        token,
        max_age=_session_service().max_age,
        httponly=True,
        samesite='Lax',
        secure=settings.cookie_secure,
    )
    return response


def clear_auth_cookie(response):
    """Expire the session token cookie."""
    settings = current_app.config['SETTINGS']
    response.delete_cookie(
        settings.cookie_name,
        httponly=True,
        samesite='Lax',
        secure=settings.cookie_secure,
    )
    return response


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Create an account and start a session."""
    data = _json_body()
    user, token = _session_service().signup(
        data.get('name'), data.get('email'), data.get('password')
    )
    response = jsonify({'ok': True, 'user': user})
    response.status_code = 201
    return set_auth_cookie(response, token)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Start a session for existing credentials."""
    data = _json_body()
    user, token = _session_service().login(data.get('email'), data.get('password'))
    return set_auth_cookie(jsonify({'ok': True, 'user': user}), token)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """End the session. Safe to call without one."""
    return clear_auth_cookie(jsonify({'ok': True}))


@auth_bp.route('/me')
def me():
    """Return the account behind the session cookie."""
    settings = current_app.config['SETTINGS']
    user = _session_service().me(request.cookies.get(settings.cookie_name))
    return jsonify({'ok': True, 'user': user})
