"""
Festival Content Models

FLOW OVERVIEW
- Festival: a dated religious occasion with its story (mythology).
- Ritual: ordered steps and materials for a festival ("Priest Mode").
- Bhajan: devotional music reference (YouTube link + metadata) for a festival.
"""

from datetime import datetime
from .database import db


class Festival(db.Model):
    """A dated religious occasion"""
    __tablename__ = 'festivals'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    religion = db.Column(db.String(100), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    image_url = db.Column(db.String(1024))
    story = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    rituals = db.relationship('Ritual', backref='festival', lazy=True)
    bhajans = db.relationship('Bhajan', backref='festival', lazy=True)

    def __repr__(self):
        return f'<Festival {self.name} on {self.date}>'


class Ritual(db.Model):
    """Structured procedure tied to a festival"""
    __tablename__ = 'rituals'

    id = db.Column(db.Integer, primary_key=True)
    festival_id = db.Column(db.Integer, db.ForeignKey('festivals.id'), index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    content = db.Column(db.Text, nullable=False)
    materials = db.Column(db.JSON, default=list)
    steps = db.Column(db.JSON, nullable=False)  # ordered list of step texts
    religion = db.Column(db.String(100), nullable=False, index=True)
    verified = db.Column(db.Boolean, default=False)
    contributor_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<Ritual {self.title}>'


class Bhajan(db.Model):
    """Devotional music link"""
    __tablename__ = 'bhajans'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    youtube_url = db.Column(db.String(1024), nullable=False)
    type = db.Column(db.String(50), nullable=False)
    religion = db.Column(db.String(100), nullable=False)
    duration = db.Column(db.String(20))
    festival_id = db.Column(db.Integer, db.ForeignKey('festivals.id'), index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<Bhajan {self.title}>'
