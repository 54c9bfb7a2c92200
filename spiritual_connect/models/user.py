"""
User Models

This module contains the User and UserPreferences models. Users are created on
first Google sign-in; each user owns at most one preferences row.
"""

from datetime import datetime
from .database import db


class User(db.Model):
    """Account keyed by the Google identity that signed in"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False)
    google_id = db.Column(db.String(255), unique=True, nullable=False)
    first_name = db.Column(db.String(120))
    last_name = db.Column(db.String(120))
    profile_picture = db.Column(db.String(1024))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    preferences = db.relationship('UserPreferences', backref='user', uselist=False, lazy=True)
    contributions = db.relationship('Contribution', backref='user', lazy=True)

    def __repr__(self):
        return f'<User {self.email}>'


class UserPreferences(db.Model):
    """Religion, language and notification settings for a user"""
    __tablename__ = 'user_preferences'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False)
    primary_religion = db.Column(db.String(100), nullable=False)
    secondary_interests = db.Column(db.JSON, default=list)
    languages = db.Column(db.JSON, default=list)
    festival_reminder_days = db.Column(db.Integer, default=1)
    notify_festivals = db.Column(db.Boolean, default=True)
    notify_daily_content = db.Column(db.Boolean, default=True)
    notify_new_content = db.Column(db.Boolean, default=True)
    notify_community_updates = db.Column(db.Boolean, default=False)
    notify_emails = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<UserPreferences user={self.user_id} religion={self.primary_religion}>'
