"""
Google identity checks.

The client signs in with Google and posts the profile it received. When
GOOGLE_VERIFY_ID_TOKENS is on, the accompanying ID token is checked against
Google's tokeninfo endpoint and must agree with the posted profile.
"""

import json
import logging
import time

import requests

from .prom_metrics import observe_external_call

TOKENINFO_URL = 'https://oauth2.googleapis.com/tokeninfo'
VALID_ISSUERS = ('accounts.google.com', 'https://accounts.google.com')

logger = logging.getLogger(__name__)


class GoogleTokenError(Exception):
    """Raised when an ID token cannot be verified"""


def verify_id_token(id_token, client_id, timeout=10):
    """
    Verify a Google ID token and return its claims.

    Raises:
        GoogleTokenError: token rejected by Google, wrong audience/issuer, or expired
    """
    if not id_token:
        raise GoogleTokenError('ID token is required')

    started_at = time.time()
    try:
        response = requests.get(TOKENINFO_URL, params={'id_token': id_token}, timeout=timeout)
    except requests.RequestException as e:
        observe_external_call('google', 'error', time.time() - started_at)
        logger.error(json.dumps({'event': 'google_tokeninfo_error', 'error': str(e)[:200]}))
        raise GoogleTokenError('Could not reach Google to verify the token') from e

    if response.status_code != 200:
        observe_external_call('google', 'rejected', time.time() - started_at)
        raise GoogleTokenError('Google rejected the ID token')

    try:
        claims = response.json()
    except ValueError as e:
        observe_external_call('google', 'error', time.time() - started_at)
        raise GoogleTokenError('Google returned an unreadable token response') from e
    observe_external_call('google', 'success', time.time() - started_at)
    if not isinstance(claims, dict):
        raise GoogleTokenError('Google returned an unreadable token response')

    if client_id and claims.get('aud') != client_id:
        raise GoogleTokenError('ID token was issued for a different client')
    if claims.get('iss') not in VALID_ISSUERS:
        raise GoogleTokenError('ID token has an unexpected issuer')
    try:
        expires_at = int(claims.get('exp', 0))
    except (TypeError, ValueError) as e:
        raise GoogleTokenError('ID token has an invalid expiry') from e
    if expires_at < time.time():
        raise GoogleTokenError('ID token has expired')

    return claims


def check_profile_matches(claims, profile):
    """The posted google_id/email must be the ones Google vouched for."""
    if claims.get('sub') != profile.get('google_id'):
        raise GoogleTokenError('ID token does not match google_id')
    if (claims.get('email') or '').lower() != profile.get('email'):
        raise GoogleTokenError('ID token does not match email')
