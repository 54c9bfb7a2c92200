"""
Application Configuration

FLOW OVERVIEW
- Config.__init__
  • Reads FLASK_ENV to select which .env file to load (dev/prod). Testing bypasses file load.
- Properties expose configuration values, defaulting to sensible development-safe defaults.
- STORAGE_BACKEND picks the repository implementation: 'memory' unless a DATABASE_URL is set.
"""

import os
from dotenv import load_dotenv


def _env_flag(name, default):
    return os.getenv(name, default).lower() == 'true'


class Config:
    """Base configuration class"""

    def __init__(self):
        # Load environment variables based on FLASK_ENV
        env_file = os.getenv('FLASK_ENV', 'development')
        if env_file == 'testing':
            # For testing, don't load config files, use environment variables directly
            pass
        elif env_file == 'production':
            load_dotenv('config.prod.env')
        else:
            load_dotenv('config.env')  # Default to development

    @property
    def ENV_NAME(self):
        """Deployment environment reported by /api/status"""
        return os.getenv('FLASK_ENV', 'development')

    @property
    def SECRET_KEY(self):
        """Application secret key, also signs the session cookie"""
        return os.getenv('SESSION_SECRET', os.getenv('SECRET_KEY', 'spiritual-connect-secret'))

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        """Database connection URI"""
        return os.getenv('DATABASE_URL', 'sqlite:///:memory:')

    @property
    def SQLALCHEMY_TRACK_MODIFICATIONS(self):
        """SQLAlchemy track modifications setting"""
        return False

    @property
    def STORAGE_BACKEND(self):
        """'memory' or 'database'"""
        default = 'database' if os.getenv('DATABASE_URL') else 'memory'
        return os.getenv('STORAGE_BACKEND', default).lower()

    @property
    def SEED_SAMPLE_DATA(self):
        """Seed sample festivals/rituals/bhajans into an empty in-memory store"""
        return _env_flag('SEED_SAMPLE_DATA', 'True')

    @property
    def ELEVENLABS_API_KEY(self):
        """Speech synthesis provider key"""
        return os.getenv('ELEVENLABS_API_KEY')

    @property
    def ELEVENLABS_API_URL(self):
        return os.getenv('ELEVENLABS_API_URL', 'https://api.elevenlabs.io/v1')

    @property
    def ELEVENLABS_MODEL_ID(self):
        return os.getenv('ELEVENLABS_MODEL_ID', 'eleven_monolingual_v1')

    @property
    def SPEECH_CACHE_SIZE(self):
        """Number of synthesized clips kept in memory"""
        return int(os.getenv('SPEECH_CACHE_SIZE', 64))

    @property
    def SPEECH_TIMEOUT_SECONDS(self):
        return float(os.getenv('SPEECH_TIMEOUT_SECONDS', 30))

    @property
    def OPENAI_API_KEY(self):
        """Key for the document categorizer"""
        return os.getenv('OPENAI_API_KEY')

    @property
    def OPENAI_MODEL(self):
        return os.getenv('OPENAI_MODEL', 'gpt-4o')

    @property
    def GOOGLE_CLIENT_ID(self):
        """OAuth client id that Google ID tokens must be issued for"""
        return os.getenv('GOOGLE_CLIENT_ID')

    @property
    def GOOGLE_VERIFY_ID_TOKENS(self):
        """Require and verify a Google ID token on login"""
        return _env_flag('GOOGLE_VERIFY_ID_TOKENS', 'False')

    @property
    def MODERATOR_EMAILS(self):
        """Comma separated list of emails allowed to moderate contributions"""
        raw = os.getenv('MODERATOR_EMAILS', '')
        return [e.strip().lower() for e in raw.split(',') if e.strip()]

    @property
    def MAIL_SERVER(self):
        """Mail server hostname"""
        return os.getenv('MAIL_SERVER', 'smtp.gmail.com')

    @property
    def MAIL_PORT(self):
        """Mail server port"""
        return int(os.getenv('MAIL_PORT', 587))

    @property
    def MAIL_USE_TLS(self):
        """Whether to use TLS for mail"""
        return _env_flag('MAIL_USE_TLS', 'True')

    @property
    def MAIL_USE_SSL(self):
        """Whether to use SSL for mail"""
        return _env_flag('MAIL_USE_SSL', 'False')

    @property
    def MAIL_USERNAME(self):
        """Mail server username"""
        return os.getenv('MAIL_USERNAME')

    @property
    def MAIL_PASSWORD(self):
        """Mail server password"""
        return os.getenv('MAIL_PASSWORD')

    @property
    def MAIL_DEFAULT_SENDER(self):
        """Default sender email address"""
        return os.getenv('MAIL_DEFAULT_SENDER', 'no-reply@spiritual-connect.local')

    @property
    def SESSION_COOKIE_SECURE(self):
        """Whether session cookies should be secure (HTTPS only)"""
        return _env_flag('SESSION_COOKIE_SECURE', 'False')

    @property
    def SESSION_COOKIE_HTTPONLY(self):
        """Whether session cookies should be HTTP only"""
        return True

    @property
    def SESSION_COOKIE_SAMESITE(self):
        """Session cookie SameSite policy"""
        return 'Lax'

    @property
    def PERMANENT_SESSION_LIFETIME(self):
        """Session lifetime in seconds"""
        return 86400  # 24 hours
