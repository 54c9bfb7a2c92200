"""
Input Validation Utilities

FLOW OVERVIEW
- validate_email(email)
  • RFC-like syntax checks and basic security checks; returns sanitized lowercased value.
- sanitize_input(input, max_length)
  • Trim, bound length, normalize, and remove null bytes.
- validate_google_profile / validate_profile_update / validate_preferences /
  validate_contribution / validate_status_update / validate_synthesis_request
  • Declarative field checks for each JSON payload the API accepts. Each returns a
    ValidationResult whose sanitized_value is the cleaned dict ready for storage.
"""

import re
from typing import Any, Optional
from dataclasses import dataclass

from ..models.contribution import STATUS_VERIFIED, STATUS_REJECTED


@dataclass
class ValidationResult:
    """Result of validation operation"""
    is_valid: bool
    error_message: Optional[str] = None
    sanitized_value: Any = None


@dataclass(frozen=True)
class Field:
    """Declarative description of one payload field"""
    name: str
    kind: type
    required: bool = False
    max_length: int = 1000
    min_length: int = 0
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    choices: Optional[tuple] = None
    free_text: bool = False  # long prose; skip markup screening


class InputValidator:
    """Input validation following the rules each payload schema declares"""

    # RFC 5322 compliant email regex (simplified but secure)
    EMAIL_PATTERN = re.compile(
        r'^[a-zA-Z0-9.!#$%&\'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$'
    )

    URL_PATTERN = re.compile(r'^https?://[^\s<>"]+$', re.IGNORECASE)

    XSS_PATTERNS = [
        r'<script[^>]*>.*?</script>',
        r'javascript:',
        r'on\w+\s*=',
        r'<iframe[^>]*>',
        r'<svg[^>]*>',
        r'data:text/html',
        r'vbscript:',
    ]

    @classmethod
    def validate_email(cls, email: str) -> ValidationResult:
        """
        Validate email address

        Args:
            email: Email address to validate

        Returns:
            ValidationResult with validation status and sanitized value
        """
        if not email or not isinstance(email, str):
            return ValidationResult(False, "Email must be a non-empty string")

        email = email.strip()
        if email == "":
            return ValidationResult(False, "Email cannot be empty")

        # Length validation (RFC 5321 limits)
        if len(email) > 254:
            return ValidationResult(False, "Email address too long (max 254 characters)")

        if not cls.EMAIL_PATTERN.match(email):
            return ValidationResult(False, "Invalid email format")

        local_part, domain = email.split('@')
        if len(local_part) > 64:
            return ValidationResult(False, "Email local part too long (max 64 characters)")

        if local_part.startswith('.') or local_part.endswith('.') or '..' in local_part:
            return ValidationResult(False, "Invalid email format")

        if cls._contains_xss(email):
            return ValidationResult(False, "Email contains invalid characters")

        return ValidationResult(True, sanitized_value=email.lower())

    @classmethod
    def sanitize_input(cls, input_string: str, max_length: int = 1000) -> str:
        """
        Sanitize user input

        Args:
            input_string: Input string to sanitize
            max_length: Maximum allowed length

        Returns:
            Sanitized string
        """
        if not input_string:
            return ""

        sanitized = str(input_string).strip()

        if len(sanitized) > max_length:
            sanitized = sanitized[:max_length]

        # Remove null bytes
        sanitized = sanitized.replace('\x00', '')

        # Normalize line endings
        sanitized = sanitized.replace('\r\n', '\n').replace('\r', '\n')

        return sanitized

    @classmethod
    def validate_url(cls, value: str) -> bool:
        return bool(value) and bool(cls.URL_PATTERN.match(value))

    @classmethod
    def validate_fields(cls, data, schema, partial=False) -> ValidationResult:
        """
        Check `data` against a tuple of Field declarations.

        Unknown keys are ignored. With partial=True required fields may be absent.
        Explicit nulls are accepted for optional fields only.
        """
        if not isinstance(data, dict):
            return ValidationResult(False, "Request data must be a JSON object")

        cleaned = {}
        for rule in schema:
            if rule.name not in data:
                if rule.required and not partial:
                    return ValidationResult(False, f"{rule.name} is required")
                continue

            value = data[rule.name]
            if value is None:
                if rule.required:
                    return ValidationResult(False, f"{rule.name} is required")
                cleaned[rule.name] = None
                continue

            error = cls._check_value(rule, value)
            if error:
                return ValidationResult(False, error)
            cleaned[rule.name] = cls._clean_value(rule, value)

            if rule.kind is str and rule.required and not cleaned[rule.name]:
                return ValidationResult(False, f"{rule.name} cannot be empty")

        return ValidationResult(True, sanitized_value=cleaned)

    @classmethod
    def _check_value(cls, rule, value):
        if rule.kind is bool:
            if not isinstance(value, bool):
                return f"{rule.name} must be true or false"
        elif rule.kind is int:
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, int):
                return f"{rule.name} must be an integer"
            if rule.minimum is not None and value < rule.minimum:
                return f"{rule.name} must be at least {rule.minimum}"
            if rule.maximum is not None and value > rule.maximum:
                return f"{rule.name} must be at most {rule.maximum}"
        elif rule.kind is float:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return f"{rule.name} must be a number"
            if rule.minimum is not None and value < rule.minimum:
                return f"{rule.name} must be at least {rule.minimum}"
            if rule.maximum is not None and value > rule.maximum:
                return f"{rule.name} must be at most {rule.maximum}"
        elif rule.kind is list:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                return f"{rule.name} must be a list of strings"
            if len(value) > 50:
                return f"{rule.name} has too many entries (max 50)"
        elif rule.kind is str:
            if not isinstance(value, str):
                return f"{rule.name} must be a string"
            stripped = value.strip()
            if len(stripped) > rule.max_length:
                return f"{rule.name} too long (max {rule.max_length} characters)"
            if stripped and len(stripped) < rule.min_length:
                return f"{rule.name} must be at least {rule.min_length} characters"
            if rule.choices and stripped not in rule.choices:
                return f"{rule.name} must be one of: {', '.join(rule.choices)}"
            if not rule.free_text and cls._contains_xss(stripped):
                return f"{rule.name} contains invalid content"
        return None

    @classmethod
    def _clean_value(cls, rule, value):
        if rule.kind is str:
            return cls.sanitize_input(value, rule.max_length)
        if rule.kind is list:
            cleaned = [cls.sanitize_input(v, 100) for v in value]
            return [v for v in cleaned if v]
        if rule.kind is float:
            return float(value)
        return value

    @classmethod
    def _contains_xss(cls, text: str) -> bool:
        """Check if text contains XSS patterns"""
        for pattern in cls.XSS_PATTERNS:
            if re.search(pattern, text, re.IGNORECASE):
                return True
        return False


GOOGLE_PROFILE_SCHEMA = (
    Field('google_id', str, required=True, max_length=255),
    Field('email', str, required=True, max_length=254),
    Field('username', str, required=True, max_length=120),
    Field('first_name', str, max_length=120),
    Field('last_name', str, max_length=120),
    Field('profile_picture', str, max_length=1024),
    Field('id_token', str, max_length=4096),
)

PROFILE_UPDATE_SCHEMA = (
    Field('first_name', str, max_length=120),
    Field('last_name', str, max_length=120),
)

PREFERENCES_SCHEMA = (
    Field('primary_religion', str, required=True, max_length=100),
    Field('secondary_interests', list),
    Field('languages', list),
    Field('festival_reminder_days', int, minimum=0, maximum=365),
    Field('notify_festivals', bool),
    Field('notify_daily_content', bool),
    Field('notify_new_content', bool),
    Field('notify_community_updates', bool),
    Field('notify_emails', bool),
)

CONTRIBUTION_SCHEMA = (
    Field('title', str, required=True, min_length=3, max_length=300),
    Field('description', str, max_length=5000, free_text=True),
    Field('content', str, max_length=100000, free_text=True),
    Field('religion', str, max_length=100),
    Field('festival', str, max_length=200),
    Field('file_url', str, max_length=1024),
    Field('year', str, min_length=4, max_length=4),
)

STATUS_UPDATE_SCHEMA = (
    Field('status', str, required=True, max_length=20, choices=(STATUS_VERIFIED, STATUS_REJECTED)),
)

SYNTHESIS_SCHEMA = (
    Field('text', str, required=True, max_length=5000, free_text=True),
    Field('voice_id', str, max_length=64),
    Field('stability', float, minimum=0, maximum=1),
    Field('similarity_boost', float, minimum=0, maximum=1),
)

CATEGORIZE_SCHEMA = (
    Field('text', str, required=True, max_length=100000, free_text=True),
)


def validate_email(email: str) -> ValidationResult:
    """Validate email address"""
    return InputValidator.validate_email(email)


def sanitize_input(input_string: str, max_length: int = 1000) -> str:
    """Sanitize user input"""
    return InputValidator.sanitize_input(input_string, max_length)


def validate_google_profile(data) -> ValidationResult:
    """Validate the Google profile posted on login"""
    result = InputValidator.validate_fields(data, GOOGLE_PROFILE_SCHEMA)
    if not result.is_valid:
        return result
    profile = result.sanitized_value
    email_result = validate_email(profile['email'])
    if not email_result.is_valid:
        return email_result
    profile['email'] = email_result.sanitized_value
    picture = profile.get('profile_picture')
    if picture and not InputValidator.validate_url(picture):
        return ValidationResult(False, "profile_picture must be an http(s) URL")
    return ValidationResult(True, sanitized_value=profile)


def validate_profile_update(data) -> ValidationResult:
    """Only first and last name are editable"""
    return InputValidator.validate_fields(data, PROFILE_UPDATE_SCHEMA, partial=True)


def validate_preferences(data) -> ValidationResult:
    """Validate a full preferences payload"""
    return InputValidator.validate_fields(data, PREFERENCES_SCHEMA)


def validate_contribution(data) -> ValidationResult:
    """Validate a new contribution; religion may be filled in by categorization"""
    result = InputValidator.validate_fields(data, CONTRIBUTION_SCHEMA)
    if not result.is_valid:
        return result
    contribution = result.sanitized_value
    year = contribution.get('year') or None
    contribution['year'] = year
    if year is not None and not year.isdigit():
        return ValidationResult(False, "year must be a 4 digit year")
    file_url = contribution.get('file_url')
    if file_url and not InputValidator.validate_url(file_url):
        return ValidationResult(False, "file_url must be an http(s) URL")
    if not contribution.get('religion') and not contribution.get('content'):
        return ValidationResult(False, "religion is required when no content is provided")
    return result


def validate_status_update(data) -> ValidationResult:
    """Moderation decision"""
    return InputValidator.validate_fields(data, STATUS_UPDATE_SCHEMA)


def validate_synthesis_request(data) -> ValidationResult:
    """Text-to-speech request"""
    if isinstance(data, dict) and not (isinstance(data.get('text'), str) and data['text'].strip()):
        return ValidationResult(False, "Text is required")
    return InputValidator.validate_fields(data, SYNTHESIS_SCHEMA)


def validate_categorize_request(data) -> ValidationResult:
    """Document categorization request"""
    if isinstance(data, dict) and not (isinstance(data.get('text'), str) and data['text'].strip()):
        return ValidationResult(False, "Text is required")
    return InputValidator.validate_fields(data, CATEGORIZE_SCHEMA)
