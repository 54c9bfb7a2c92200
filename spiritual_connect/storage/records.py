"""
Plain records returned by every storage backend.

Both MemoryStorage and DatabaseStorage hand these out so routes never see
SQLAlchemy rows. Field names mirror the table columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Any, Dict, List, Optional


def _serialize(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, list):
        return list(value)
    return value


class _Record:
    def as_dict(self) -> Dict[str, Any]:
        return {f.name: _serialize(getattr(self, f.name)) for f in fields(self)}


@dataclass
class UserRecord(_Record):
    id: int
    username: str
    email: str
    google_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_picture: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def public_dict(self) -> Dict[str, Any]:
        """Profile fields safe to send to the client (no google id)."""
        return {
            'id': self.id,
            'email': self.email,
            'username': self.username,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'profile_picture': self.profile_picture,
        }


@dataclass
class PreferencesRecord(_Record):
    id: int
    user_id: int
    primary_religion: str
    secondary_interests: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    festival_reminder_days: int = 1
    notify_festivals: bool = True
    notify_daily_content: bool = True
    notify_new_content: bool = True
    notify_community_updates: bool = False
    notify_emails: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class FestivalRecord(_Record):
    id: int
    name: str
    description: str
    religion: str
    date: date
    image_url: Optional[str] = None
    story: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class RitualRecord(_Record):
    id: int
    title: str
    description: str
    content: str
    steps: List[str]
    religion: str
    festival_id: Optional[int] = None
    materials: List[str] = field(default_factory=list)
    verified: bool = False
    contributor_id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class BhajanRecord(_Record):
    id: int
    title: str
    youtube_url: str
    type: str
    religion: str
    description: Optional[str] = None
    duration: Optional[str] = None
    festival_id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class ContributionRecord(_Record):
    id: int
    user_id: int
    title: str
    religion: str
    description: Optional[str] = None
    file_url: Optional[str] = None
    content: Optional[str] = None
    festival: Optional[str] = None
    status: str = 'pending'
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
