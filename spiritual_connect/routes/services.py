"""
Service Routes

FLOW OVERVIEW
- /api/synthesize [POST]
  • Validate text and voice settings → SpeechSynthesizer → data URL (or provider error passthrough).
- /api/voices [GET]
  • Voice catalogue for the Priest Mode picker.
- /api/categorize [POST]
  • Religion/festival guess for a ritual text; Unknown on any failure.
"""

from flask import Blueprint, jsonify, current_app

from ..utils.api_utils import request_validator
from ..utils.auth_utils import login_required
from ..utils.speech import DEFAULT_VOICE_ID, SPIRITUAL_VOICES, VOICES
from ..utils.validators import validate_categorize_request, validate_synthesis_request

services_bp = Blueprint('services', __name__)


@services_bp.route('/synthesize', methods=['POST'])
@login_required
def synthesize():
    """Text-to-speech for ritual narration"""
    is_valid, values, error = request_validator.validate_payload(validate_synthesis_request)
    if not is_valid:
        return error

    result = current_app.extensions['speech'].synthesize(
        values['text'],
        voice_id=values.get('voice_id'),
        stability=values.get('stability'),
        similarity_boost=values.get('similarity_boost'),
    )
    if not result.success:
        current_app.logger.warning(f"Voice synthesis failed with status {result.status_code}: {result.message}")
    return jsonify(result.to_dict()), result.status_code


@services_bp.route('/voices', methods=['GET'])
def voices():
    return jsonify({
        'default_voice_id': DEFAULT_VOICE_ID,
        'voices': VOICES,
        'spiritual_voices': SPIRITUAL_VOICES,
    })


@services_bp.route('/categorize', methods=['POST'])
@login_required
def categorize():
    """Guess religion and festival for a document"""
    is_valid, values, error = request_validator.validate_payload(validate_categorize_request)
    if not is_valid:
        return error
    return jsonify(current_app.extensions['categorizer'].categorize(values['text']))
