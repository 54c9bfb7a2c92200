"""
Email notices sent through Flask-Mail.

Only moderation outcomes are mailed today. Sending is skipped when the
contributor turned off notify_emails, and Flask-Mail suppresses delivery
when TESTING is set.
"""

import logging

from flask import current_app
from flask_mail import Mail, Message

from ..models.contribution import STATUS_VERIFIED

mail = Mail()

logger = logging.getLogger(__name__)

SUBJECTS = {
    STATUS_VERIFIED: 'Your contribution has been verified',
}
DEFAULT_SUBJECT = 'Update on your contribution'


def _body(user, contribution):
    name = user.first_name or user.username
    if contribution.status == STATUS_VERIFIED:
        outcome = 'has been verified and is now visible to the community'
    else:
        outcome = 'was reviewed and could not be accepted'
    return (
        f"Namaste {name},\n\n"
        f"Your contribution \"{contribution.title}\" {outcome}.\n\n"
        f"Thank you for sharing with Spiritual Connect."
    )


def send_moderation_notice(storage, contribution):
    """
    Tell the contributor how their submission was moderated.

    Returns:
        True when a message was handed to the mail transport, False otherwise.
    """
    user = storage.get_user(contribution.user_id)
    if not user:
        return False

    preferences = storage.get_user_preferences(user.id)
    if preferences is not None and not preferences.notify_emails:
        logger.info(f"Skipping moderation notice for user {user.id}: email notices disabled")
        return False

    msg = Message(
        SUBJECTS.get(contribution.status, DEFAULT_SUBJECT),
        recipients=[user.email],
        body=_body(user, contribution),
        sender=current_app.config.get('MAIL_DEFAULT_SENDER'),
    )
    try:
        mail.send(msg)
    except Exception as e:
        # Delivery problems must not undo the moderation decision
        logger.error(f"Failed to send moderation notice to user {user.id}: {e}", exc_info=True)
        return False

    logger.info(f"Moderation notice sent to user {user.id} for contribution {contribution.id}")
    return True
