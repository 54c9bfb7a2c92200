"""
Test configuration and shared fixtures for Spiritual Connect tests.

This file contains:
- Centralized test configuration
- App fixtures for the in-memory and SQLAlchemy storage backends
- Signed-in client fixtures and festival factories
"""

from datetime import date, timedelta

import pytest

from spiritual_connect import create_app


# Centralized test configuration
TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret-key',
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    'STORAGE_BACKEND': 'memory',
    'SEED_SAMPLE_DATA': False,
    'MAIL_DEFAULT_SENDER': 'test@example.com',
    'MODERATOR_EMAILS': ['moderator@example.com'],
    'ELEVENLABS_API_KEY': 'test-elevenlabs-key',
    'ELEVENLABS_API_URL': 'https://api.elevenlabs.test/v1',
    'OPENAI_API_KEY': None,
    'GOOGLE_VERIFY_ID_TOKENS': False,
    'GOOGLE_CLIENT_ID': 'test-client-id.apps.googleusercontent.com',
}

USER_PROFILE = {
    'google_id': 'google-user-1',
    'email': 'devotee@example.com',
    'username': 'devotee',
    'first_name': 'Asha',
    'last_name': 'Rao',
    'profile_picture': 'https://example.com/asha.png',
}

MODERATOR_PROFILE = {
    'google_id': 'google-moderator-1',
    'email': 'moderator@example.com',
    'username': 'moderator',
}


def make_app(**overrides):
    config = dict(TEST_CONFIG)
    config.update(overrides)
    return create_app(config)


@pytest.fixture
def app():
    """Create and configure a new app instance (memory storage) for each test."""
    return make_app()


@pytest.fixture
def database_app():
    """Same app, backed by SQLite through SQLAlchemy."""
    app = make_app(STORAGE_BACKEND='database')
    yield app
    with app.app_context():
        from spiritual_connect.models import db
        db.session.remove()
        db.drop_all()


@pytest.fixture
def db_session(database_app):
    """SQLAlchemy session of the database-backed app."""
    from spiritual_connect.models import db
    with database_app.app_context():
        yield db.session


@pytest.fixture(params=['memory', 'database'])
def any_app(request):
    """Run the test once per storage backend."""
    app = make_app(STORAGE_BACKEND=request.param)
    yield app
    if request.param == 'database':
        with app.app_context():
            from spiritual_connect.models import db
            db.session.remove()
            db.drop_all()


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()


@pytest.fixture
def app_context(app):
    """Create an application context for storage operations."""
    with app.app_context():
        yield


@pytest.fixture
def storage(any_app):
    """Storage backend inside an app context, for both backends."""
    with any_app.app_context():
        yield any_app.extensions['storage']


def login(client, **profile):
    """Sign in through the Google endpoint and return the response."""
    body = dict(USER_PROFILE)
    body.update(profile)
    return client.post('/api/auth/google', json=body)


@pytest.fixture
def auth_client(app):
    """Client with a signed-in regular user."""
    client = app.test_client()
    response = login(client)
    assert response.status_code == 200
    return client


@pytest.fixture
def moderator_client(app):
    """Client signed in as a moderator."""
    client = app.test_client()
    response = client.post('/api/auth/google', json=MODERATOR_PROFILE)
    assert response.status_code == 200
    return client


def festival_values(**overrides):
    values = {
        'name': 'Diwali',
        'description': 'Festival of lights',
        'religion': 'Hinduism',
        'date': date.today() + timedelta(days=10),
    }
    values.update(overrides)
    return values


def ritual_values(**overrides):
    values = {
        'title': 'Lakshmi Puja',
        'description': 'Evening worship of Goddess Lakshmi',
        'content': 'Perform the puja after sunset.',
        'steps': ['Clean the altar', 'Light the diyas', 'Offer sweets'],
        'religion': 'Hinduism',
        'materials': ['Diyas', 'Flowers'],
    }
    values.update(overrides)
    return values


def bhajan_values(**overrides):
    values = {
        'title': 'Om Jai Lakshmi Mata',
        'youtube_url': 'https://www.youtube.com/watch?v=abc123',
        'type': 'aarti',
        'religion': 'Hinduism',
        'duration': '5:30',
    }
    values.update(overrides)
    return values
