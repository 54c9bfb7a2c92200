"""
Contribution Model

User-submitted documents and calendars awaiting moderation. Religion and
festival are free-text tags, not foreign keys.
"""

from datetime import datetime
from .database import db

STATUS_PENDING = 'pending'
STATUS_VERIFIED = 'verified'
STATUS_REJECTED = 'rejected'
CONTRIBUTION_STATUSES = (STATUS_PENDING, STATUS_VERIFIED, STATUS_REJECTED)


class Contribution(db.Model):
    """Community submission"""
    __tablename__ = 'contributions'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    title = db.Column(db.String(300), nullable=False)
    description = db.Column(db.Text)
    file_url = db.Column(db.String(1024))
    content = db.Column(db.Text)
    religion = db.Column(db.String(100), nullable=False)
    festival = db.Column(db.String(200))
    status = db.Column(db.String(20), default=STATUS_PENDING, nullable=False, index=True)  # pending, verified, rejected
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint(
            "status IN ('pending', 'verified', 'rejected')",
            name='valid_contribution_status'
        ),
    )

    def __repr__(self):
        return f'<Contribution {self.title} ({self.status})>'
