#!/usr/bin/env python3
"""
Spiritual Connect application entry point.

Creates the Flask application via `create_app`. When executed directly it runs
the development server; in production a WSGI server should import `app` from
this module.

Environment variables of interest:
- FLASK_ENV: 'testing' skips config files and uses an in-memory store.
- DATABASE_URL: when set, data lives in that database instead of memory.
- SESSION_SECRET, ELEVENLABS_API_KEY, OPENAI_API_KEY, mail settings: consumed by `create_app`.
"""

import os
from spiritual_connect import create_app

# Create app instance
if os.getenv('FLASK_ENV') == 'testing':
    # Use test configuration for testing environment
    test_config = {
        'TESTING': True,
        'SECRET_KEY': os.getenv('SECRET_KEY', 'test-secret-key'),
        'SQLALCHEMY_DATABASE_URI': os.getenv('DATABASE_URL', 'sqlite:///:memory:'),
        'STORAGE_BACKEND': os.getenv('STORAGE_BACKEND', 'memory'),
        'SEED_SAMPLE_DATA': True,
        'MAIL_DEFAULT_SENDER': os.getenv('MAIL_DEFAULT_SENDER', 'test@example.com'),
        'ELEVENLABS_API_KEY': os.getenv('ELEVENLABS_API_KEY'),
        'OPENAI_API_KEY': os.getenv('OPENAI_API_KEY'),
    }
    app = create_app(test_config)
else:
    app = create_app()

print("🚀 Starting Spiritual Connect server...")
print(f"📊 Storage backend: {app.extensions['storage'].name}")

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=int(os.getenv('PORT', 5000)))
