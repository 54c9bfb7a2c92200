"""
Contribution Routes

FLOW OVERVIEW
- /api/contributions [GET]
  • Caller's submissions, newest first.
- /api/contributions [POST]
  • Validate → auto-categorize content when religion is missing → store as pending → 201.
  • A `year` marks a festival calendar upload; the title gets a "<year> Calendar" suffix.
- /api/contributions/pending [GET] (moderator)
  • Moderation queue, oldest first.
- /api/contributions/<id>/status [PATCH] (moderator)
  • Verify or reject, then email the contributor if they opted in.
"""

from flask import Blueprint, jsonify, current_app

from ..models.contribution import STATUS_PENDING
from ..storage import get_storage
from ..utils.api_utils import request_validator, response_formatter
from ..utils.auth_utils import current_user_id, login_required, moderator_required
from ..utils.categorizer import UNKNOWN
from ..utils.notifications import send_moderation_notice
from ..utils.validators import validate_contribution, validate_status_update

contributions_bp = Blueprint('contributions', __name__)


def _fill_category(values):
    """Ask the categorizer for religion/festival when the uploader left religion blank."""
    if values.get('religion') or not values.get('content'):
        return values
    category = current_app.extensions['categorizer'].categorize(values['content'])
    values['religion'] = category['religion']
    if not values.get('festival') and category['festival'] != UNKNOWN:
        values['festival'] = category['festival']
    current_app.logger.info(f"Auto-categorized contribution as {category['religion']}/{category['festival']}")
    return values


@contributions_bp.route('', methods=['GET'])
@login_required
def list_contributions():
    contributions = get_storage().get_contributions_by_user(current_user_id())
    return jsonify(response_formatter.records(contributions))


@contributions_bp.route('', methods=['POST'])
@login_required
def create_contribution():
    """Submit a document or calendar for moderation"""
    is_valid, values, error = request_validator.validate_payload(validate_contribution)
    if not is_valid:
        return error

    year = values.pop('year', None)
    if year:
        values['title'] = f"{values['title']} - {year} Calendar"

    values = _fill_category(values)
    values['user_id'] = current_user_id()
    values['status'] = STATUS_PENDING

    try:
        contribution = get_storage().create_contribution(**values)
    except Exception as e:
        return response_formatter.server_error('Failed to create contribution', e)

    current_app.logger.info(f"Contribution {contribution.id} submitted by user {contribution.user_id}")
    return jsonify(contribution.as_dict()), 201


@contributions_bp.route('/pending', methods=['GET'])
@moderator_required
def pending_contributions():
    contributions = get_storage().get_contributions_by_status(STATUS_PENDING)
    return jsonify(response_formatter.records(contributions))


@contributions_bp.route('/<int:contribution_id>/status', methods=['PATCH'])
@moderator_required
def moderate_contribution(contribution_id):
    """Verify or reject a submission"""
    is_valid, values, error = request_validator.validate_payload(validate_status_update)
    if not is_valid:
        return error

    storage = get_storage()
    if not storage.get_contribution(contribution_id):
        return response_formatter.error('Contribution not found', 404)

    try:
        contribution = storage.update_contribution(contribution_id, status=values['status'])
    except Exception as e:
        return response_formatter.server_error('Failed to update contribution', e)

    current_app.logger.info(
        f"Contribution {contribution.id} marked {contribution.status} by user {current_user_id()}"
    )
    send_moderation_notice(storage, contribution)
    return jsonify(contribution.as_dict())
