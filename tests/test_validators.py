"""
Tests for Input Validation

Covers email/sanitization helpers and the request validators used by the
auth, preferences, contribution and service endpoints.
"""

from spiritual_connect.utils.validators import (
    Field,
    InputValidator,
    sanitize_input,
    validate_categorize_request,
    validate_contribution,
    validate_email,
    validate_google_profile,
    validate_preferences,
    validate_profile_update,
    validate_status_update,
    validate_synthesis_request,
)


class TestEmailValidation:
    """Email normalization"""

    def test_valid_email_is_lowercased(self):
        result = validate_email('  Devotee@Example.COM ')
        assert result.is_valid
        assert result.sanitized_value == 'devotee@example.com'

    def test_invalid_emails(self):
        for email in ['', '   ', 'invalid-email', '@example.com', 'user@', 'user name@example.com']:
            result = validate_email(email)
            assert not result.is_valid, f"Email '{email}' should be invalid"
            assert result.error_message is not None


class TestSanitizeInput:
    """Input sanitization"""

    def test_strips_and_truncates(self):
        assert sanitize_input('  hello  ') == 'hello'
        assert len(sanitize_input('a' * 50, max_length=10)) == 10

    def test_non_string_becomes_empty(self):
        assert sanitize_input(None) == ''


class TestFieldSchemas:
    """Generic schema checks"""

    SCHEMA = (
        Field('name', str, required=True, max_length=10),
        Field('count', int, minimum=0, maximum=5),
        Field('ratio', float, minimum=0, maximum=1),
        Field('flag', bool),
        Field('tags', list),
    )

    def test_valid_payload(self):
        result = InputValidator.validate_fields(
            {'name': ' Om ', 'count': 3, 'ratio': 1, 'flag': True, 'tags': ['a', ' b ']}, self.SCHEMA
        )
        assert result.is_valid
        assert result.sanitized_value == {'name': 'Om', 'count': 3, 'ratio': 1.0, 'flag': True, 'tags': ['a', 'b']}

    def test_missing_required(self):
        result = InputValidator.validate_fields({}, self.SCHEMA)
        assert not result.is_valid
        assert result.error_message == 'name is required'

    def test_partial_allows_missing_required(self):
        assert InputValidator.validate_fields({}, self.SCHEMA, partial=True).is_valid

    def test_type_errors(self):
        assert not InputValidator.validate_fields({'name': 'x', 'count': 'three'}, self.SCHEMA).is_valid
        assert not InputValidator.validate_fields({'name': 'x', 'count': True}, self.SCHEMA).is_valid
        assert not InputValidator.validate_fields({'name': 'x', 'flag': 'yes'}, self.SCHEMA).is_valid
        assert not InputValidator.validate_fields({'name': 'x', 'tags': [1, 2]}, self.SCHEMA).is_valid
        assert not InputValidator.validate_fields({'name': 'x', 'ratio': 1.5}, self.SCHEMA).is_valid

    def test_range_and_length(self):
        assert not InputValidator.validate_fields({'name': 'x', 'count': 6}, self.SCHEMA).is_valid
        assert not InputValidator.validate_fields({'name': 'x' * 11}, self.SCHEMA).is_valid

    def test_xss_rejected(self):
        result = InputValidator.validate_fields({'name': '<svg>'}, self.SCHEMA)
        assert not result.is_valid

    def test_not_an_object(self):
        assert not InputValidator.validate_fields(['name'], self.SCHEMA).is_valid


class TestGoogleProfile:
    """Sign-in payload"""

    def test_valid_profile(self):
        result = validate_google_profile({
            'google_id': '123',
            'email': 'Asha@Example.com',
            'username': 'asha',
            'profile_picture': 'https://example.com/a.png',
        })
        assert result.is_valid
        assert result.sanitized_value['email'] == 'asha@example.com'

    def test_missing_google_id(self):
        result = validate_google_profile({'email': 'a@example.com', 'username': 'a'})
        assert not result.is_valid
        assert 'google_id' in result.error_message

    def test_bad_picture_url(self):
        result = validate_google_profile({
            'google_id': '123', 'email': 'a@example.com', 'username': 'a',
            'profile_picture': 'javascript:alert(1)',
        })
        assert not result.is_valid


class TestProfileAndPreferences:
    """Profile edits and preference saves"""

    def test_profile_update_is_partial(self):
        result = validate_profile_update({'first_name': 'Meera', 'email': 'ignored@example.com'})
        assert result.is_valid
        assert result.sanitized_value == {'first_name': 'Meera'}

    def test_preferences_require_primary_religion(self):
        result = validate_preferences({'languages': ['English']})
        assert not result.is_valid
        assert result.error_message == 'primary_religion is required'

    def test_preferences_reminder_range(self):
        assert not validate_preferences({'primary_religion': 'Hinduism', 'festival_reminder_days': -1}).is_valid
        assert validate_preferences({'primary_religion': 'Hinduism', 'festival_reminder_days': 7}).is_valid


class TestContributionValidation:
    """Contribution submissions"""

    def test_valid_contribution(self):
        result = validate_contribution({'title': 'Diwali Puja Guide', 'religion': 'Hinduism'})
        assert result.is_valid
        assert result.sanitized_value['year'] is None

    def test_short_title(self):
        assert not validate_contribution({'title': 'ab', 'religion': 'Hinduism'}).is_valid

    def test_year_must_be_digits(self):
        assert not validate_contribution({'title': 'Calendar', 'religion': 'Hinduism', 'year': '20x6'}).is_valid
        assert validate_contribution({'title': 'Calendar', 'religion': 'Hinduism', 'year': '2026'}).is_valid

    def test_empty_year_is_ignored(self):
        result = validate_contribution({'title': 'Calendar', 'religion': 'Hinduism', 'year': ''})
        assert result.is_valid
        assert result.sanitized_value['year'] is None

    def test_religion_or_content_required(self):
        assert not validate_contribution({'title': 'Untagged'}).is_valid
        assert validate_contribution({'title': 'Untagged', 'content': 'Light the lamp at dusk.'}).is_valid

    def test_file_url_must_be_http(self):
        result = validate_contribution({'title': 'Doc', 'religion': 'Hinduism', 'file_url': 'ftp://x/y'})
        assert not result.is_valid

    def test_prose_content_is_not_screened(self):
        content = 'Measure portions=2 cups rice and onions=1 for the prasad.'
        assert validate_contribution({'title': 'Doc', 'content': content}).is_valid


class TestServiceRequests:
    """Status, synthesis and categorization payloads"""

    def test_status_choices(self):
        assert validate_status_update({'status': 'verified'}).is_valid
        assert validate_status_update({'status': 'rejected'}).is_valid
        assert not validate_status_update({'status': 'pending'}).is_valid
        assert not validate_status_update({'status': 'approved'}).is_valid

    def test_synthesis_requires_text(self):
        for body in [{}, {'text': ''}, {'text': '   '}, {'text': None}]:
            result = validate_synthesis_request(body)
            assert not result.is_valid
            assert result.error_message == 'Text is required'

    def test_synthesis_settings_range(self):
        assert validate_synthesis_request({'text': 'Om', 'stability': 0.5, 'similarity_boost': 1}).is_valid
        assert not validate_synthesis_request({'text': 'Om', 'stability': 2}).is_valid

    def test_categorize_requires_text(self):
        assert validate_categorize_request({'text': ''}).error_message == 'Text is required'
        assert validate_categorize_request({'text': 'Diwali puja steps'}).is_valid
