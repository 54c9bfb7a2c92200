"""
Authentication Routes

FLOW OVERVIEW
- /api/auth/google [POST]
  • Validate the posted Google profile (optionally verify its ID token) → find or create
    the user with default preferences → start session → public user JSON.
- /api/auth/session [GET]
  • Public user JSON for the signed-in user, 401 (and a cleared cookie) otherwise.
- /api/auth/logout [POST]
  • Clear session.
"""

from flask import Blueprint, jsonify, current_app

from ..storage import get_storage
from ..utils.api_utils import request_validator, response_formatter
from ..utils.auth_utils import (
    AccountConflictError,
    end_session,
    session_user,
    sign_in_with_google,
    start_session,
)
from ..utils.google_auth import GoogleTokenError, check_profile_matches, verify_id_token
from ..utils.validators import validate_google_profile

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/google', methods=['POST'])
def google_login():
    """Sign in (or sign up) with a Google profile"""
    is_valid, profile, error = request_validator.validate_payload(validate_google_profile)
    if not is_valid:
        return error

    if current_app.config.get('GOOGLE_VERIFY_ID_TOKENS'):
        try:
            claims = verify_id_token(profile.get('id_token'), current_app.config.get('GOOGLE_CLIENT_ID'))
            check_profile_matches(claims, profile)
        except GoogleTokenError as e:
            current_app.logger.warning(f"Google sign-in rejected: {e}")
            return response_formatter.error(str(e), 401)

    storage = get_storage()
    try:
        user, created = sign_in_with_google(storage, profile)
    except AccountConflictError as e:
        return response_formatter.error(str(e), 409)
    except Exception as e:
        return response_formatter.server_error('Authentication failed', e)

    start_session(user)
    current_app.logger.info(f"User {user.id} signed in ({'new' if created else 'returning'})")
    return jsonify(user.public_dict())


@auth_bp.route('/session', methods=['GET'])
def current_session():
    """Who is signed in"""
    user = session_user()
    if user is None:
        return response_formatter.error('Unauthorized', 401)

    return jsonify(user.public_dict())


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """User logout endpoint"""
    end_session()
    return jsonify({'message': 'Logged out successfully'})
