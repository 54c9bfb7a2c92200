"""
API Routes

FLOW OVERVIEW
- /api/user [GET, PUT]
  • Signed-in user's profile; PUT edits first/last name only.
- /api/preferences [GET, PUT]
  • Read preferences; PUT creates them on first save, updates afterwards.
- /api/festivals [GET] (?religion=), /api/festivals/today, /api/festivals/<id>
  • Public festival catalogue.
- /api/festivals/upcoming [GET]
  • Next festivals of the signed-in user's primary religion (?limit=, default 5).
- /api/rituals, /api/rituals/festival/<id>, /api/rituals/<id> [GET]
- /api/bhajans/festival/<id>, /api/bhajans/<id> [GET]
- /api/status [GET], /api/metrics [GET]
  • Service info and Prometheus exposition.
"""

from datetime import date

from flask import Blueprint, Response, jsonify, request, current_app

from .. import __version__
from ..storage import get_storage
from ..utils.api_utils import request_validator, response_formatter
from ..utils.auth_utils import current_user_id, login_required
from ..utils.prom_metrics import CONTENT_TYPE_LATEST, metrics_latest
from ..utils.validators import validate_preferences, validate_profile_update

api_bp = Blueprint('api', __name__)

DEFAULT_UPCOMING_LIMIT = 5
MAX_UPCOMING_LIMIT = 100


def _parse_limit(raw):
    """Positive integer limit; anything else falls back to the default"""
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_UPCOMING_LIMIT
    if limit <= 0:
        return DEFAULT_UPCOMING_LIMIT
    return min(limit, MAX_UPCOMING_LIMIT)


# User profile

@api_bp.route('/user', methods=['GET'])
@login_required
def get_user():
    user = get_storage().get_user(current_user_id())
    if not user:
        return response_formatter.error('User not found', 404)
    return jsonify(user.public_dict())


@api_bp.route('/user', methods=['PUT'])
@login_required
def update_user():
    """Edit display name"""
    is_valid, changes, error = request_validator.validate_payload(validate_profile_update)
    if not is_valid:
        return error

    storage = get_storage()
    try:
        user = storage.update_user(current_user_id(), **changes) if changes else storage.get_user(current_user_id())
    except Exception as e:
        return response_formatter.server_error('Failed to update profile', e)

    if not user:
        return response_formatter.error('User not found', 404)
    return jsonify(user.public_dict())


# Preferences

@api_bp.route('/preferences', methods=['GET'])
@login_required
def get_preferences():
    preferences = get_storage().get_user_preferences(current_user_id())
    if not preferences:
        return response_formatter.error('Preferences not found', 404)
    return jsonify(preferences.as_dict())


@api_bp.route('/preferences', methods=['PUT'])
@login_required
def save_preferences():
    """Create or replace the user's preferences"""
    is_valid, values, error = request_validator.validate_payload(validate_preferences)
    if not is_valid:
        return error

    storage = get_storage()
    user_id = current_user_id()
    try:
        existing = storage.get_user_preferences(user_id)
        if existing:
            preferences = storage.update_user_preferences(existing.id, **values)
        else:
            preferences = storage.create_user_preferences(user_id, **values)
            current_app.logger.info(f"Created preferences for user {user_id}")
    except Exception as e:
        return response_formatter.server_error('Failed to update preferences', e)

    return jsonify(preferences.as_dict())


# Festivals

@api_bp.route('/festivals', methods=['GET'])
def list_festivals():
    """All festivals, or those of ?religion="""
    storage = get_storage()
    religion = (request.args.get('religion') or '').strip()
    if religion:
        festivals = storage.get_festivals_by_religion(religion)
    else:
        festivals = storage.get_all_festivals()
    return jsonify(response_formatter.records(festivals))


@api_bp.route('/festivals/today', methods=['GET'])
def festivals_today():
    festivals = get_storage().get_festivals_by_date(date.today())
    return jsonify(response_formatter.records(festivals))


@api_bp.route('/festivals/upcoming', methods=['GET'])
@login_required
def upcoming_festivals():
    """Upcoming festivals of the user's primary religion"""
    storage = get_storage()
    preferences = storage.get_user_preferences(current_user_id())
    if not preferences:
        return response_formatter.error('User preferences not found', 404)

    limit = _parse_limit(request.args.get('limit'))
    festivals = storage.get_upcoming_festivals(preferences.primary_religion, limit)
    return jsonify(response_formatter.records(festivals))


@api_bp.route('/festivals/<int:festival_id>', methods=['GET'])
def get_festival(festival_id):
    festival = get_storage().get_festival(festival_id)
    if not festival:
        return response_formatter.error('Festival not found', 404)
    return jsonify(festival.as_dict())


# Rituals

@api_bp.route('/rituals', methods=['GET'])
def rituals_by_religion():
    religion = (request.args.get('religion') or '').strip()
    if not religion:
        return response_formatter.error('Religion parameter is required', 400)
    rituals = get_storage().get_rituals_by_religion(religion)
    return jsonify(response_formatter.records(rituals))


@api_bp.route('/rituals/festival/<int:festival_id>', methods=['GET'])
def rituals_by_festival(festival_id):
    rituals = get_storage().get_rituals_by_festival(festival_id)
    return jsonify(response_formatter.records(rituals))


@api_bp.route('/rituals/<int:ritual_id>', methods=['GET'])
def get_ritual(ritual_id):
    ritual = get_storage().get_ritual(ritual_id)
    if not ritual:
        return response_formatter.error('Ritual not found', 404)
    return jsonify(ritual.as_dict())


# Bhajans

@api_bp.route('/bhajans/festival/<int:festival_id>', methods=['GET'])
def bhajans_by_festival(festival_id):
    bhajans = get_storage().get_bhajans_by_festival(festival_id)
    return jsonify(response_formatter.records(bhajans))


@api_bp.route('/bhajans/<int:bhajan_id>', methods=['GET'])
def get_bhajan(bhajan_id):
    bhajan = get_storage().get_bhajan(bhajan_id)
    if not bhajan:
        return response_formatter.error('Bhajan not found', 404)
    return jsonify(bhajan.as_dict())


# Service

@api_bp.route('/status', methods=['GET'])
def status():
    """Service info"""
    return jsonify({
        'service': 'spiritual-connect',
        'version': __version__,
        'environment': current_app.config.get('ENV_NAME', 'development'),
        'storage_backend': get_storage().name,
    })


@api_bp.route('/metrics', methods=['GET'])
def metrics():
    """Prometheus metrics endpoint"""
    return Response(metrics_latest(), mimetype=CONTENT_TYPE_LATEST)
