"""
Authentication Utilities

FLOW OVERVIEW
- login_required: 401 JSON unless the session resolves to a stored user whose Google id
  matches the one recorded at sign-in (a stale cookie is cleared).
- moderator_required: 403 JSON unless the signed-in user's email is in MODERATOR_EMAILS.
- sign_in_with_google(storage, profile)
  • Look the user up by Google id; on first sign-in create the user. Default preferences
    are created whenever the user has none.
- start_session / end_session: write or clear the session cookie contents (user id + Google id).
"""

import copy
import logging
from functools import wraps
from flask import session, current_app, jsonify

logger = logging.getLogger(__name__)

DEFAULT_PREFERENCES = {
    'primary_religion': 'Hinduism',
    'secondary_interests': [],
    'languages': ['English'],
    'festival_reminder_days': 3,
    'notify_festivals': True,
    'notify_daily_content': True,
    'notify_new_content': True,
    'notify_community_updates': False,
    'notify_emails': True,
}


class AccountConflictError(Exception):
    """Email already belongs to a user with another Google id"""


PROFILE_FIELDS = ('username', 'email', 'google_id', 'first_name', 'last_name', 'profile_picture')


def session_user():
    """
    Stored user behind the session cookie, or None.

    Ids are reused when the memory store restarts, so the Google id saved at
    sign-in must still match; otherwise the session is cleared.
    """
    user_id = session.get('user_id')
    if user_id is None:
        return None

    from ..storage import get_storage
    user = get_storage().get_user(user_id)
    if not user or user.google_id != session.get('google_id'):
        logger.info(f"Dropping stale session for user id {user_id}")
        session.clear()
        return None
    return user


def login_required(f):
    """Decorator to require user login"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if session_user() is None:
            return jsonify({'message': 'Unauthorized'}), 401
        return f(*args, **kwargs)
    return decorated_function


def moderator_required(f):
    """Decorator to require a signed-in moderator"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = session_user()
        if user is None:
            return jsonify({'message': 'Unauthorized'}), 401
        moderators = current_app.config.get('MODERATOR_EMAILS') or []
        if user.email.lower() not in moderators:
            return jsonify({'message': 'Moderator access required'}), 403
        return f(*args, **kwargs)
    return decorated_function


def current_user_id():
    """Integer id of the signed-in user, or None"""
    return session.get('user_id')


def start_session(user):
    """Bind the session cookie to `user`"""
    session.clear()
    session.permanent = True
    session['user_id'] = user.id
    session['google_id'] = user.google_id


def end_session():
    session.clear()


def sign_in_with_google(storage, profile):
    """
    Find or create the user behind a Google profile.

    Returns:
        Tuple of (user, created)
    """
    user = storage.get_user_by_google_id(profile['google_id'])
    if user:
        _ensure_preferences(storage, user)
        return user, False

    # Same email under a new Google id would violate the unique email constraint
    if storage.get_user_by_email(profile['email']):
        raise AccountConflictError('An account with this email is linked to a different Google account')

    user = storage.create_user(**{key: profile.get(key) for key in PROFILE_FIELDS})
    _ensure_preferences(storage, user)
    logger.info(f"Created user {user.id} for first Google sign-in")
    return user, True


def _ensure_preferences(storage, user):
    # Also repairs a user whose first preferences write failed
    if storage.get_user_preferences(user.id) is None:
        storage.create_user_preferences(user.id, **copy.deepcopy(DEFAULT_PREFERENCES))
