"""
SQLAlchemy-backed storage built on the Flask-SQLAlchemy models.

Accepts whatever SQLALCHEMY_DATABASE_URI the app is configured with (Postgres
in production, SQLite for local runs and tests). Must be used inside an
application context.
"""

from __future__ import annotations

from dataclasses import fields
from datetime import date, datetime
from typing import Any, List, Optional

from sqlalchemy import func, select

from ..models import (
    Bhajan,
    Contribution,
    Festival,
    Ritual,
    User,
    UserPreferences,
    db,
)
from .base import check_fields
from .records import (
    BhajanRecord,
    ContributionRecord,
    FestivalRecord,
    PreferencesRecord,
    RitualRecord,
    UserRecord,
)


def _to_record(row, record_cls):
    if row is None:
        return None
    return record_cls(**{f.name: getattr(row, f.name) for f in fields(record_cls)})


class DatabaseStorage:
    """Relational storage; every method runs against `db.session`."""

    name = 'database'

    def _insert(self, model_cls, record_cls, values):
        check_fields(record_cls, values)
        row = model_cls(**values)
        db.session.add(row)
        db.session.commit()
        return _to_record(row, record_cls)

    def _update(self, model_cls, record_cls, row_id, values):
        check_fields(record_cls, values)
        row = db.session.get(model_cls, row_id)
        if not row:
            return None
        for key, value in values.items():
            setattr(row, key, value)
        db.session.commit()
        return _to_record(row, record_cls)

    def _get(self, model_cls, record_cls, row_id):
        return _to_record(db.session.get(model_cls, row_id), record_cls)

    def _list(self, stmt, record_cls):
        return [_to_record(row, record_cls) for row in db.session.execute(stmt).scalars()]

    def reset(self) -> None:
        """Drop and recreate every table."""
        db.drop_all()
        db.create_all()

    # Users

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        return self._get(User, UserRecord, user_id)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        row = db.session.execute(select(User).where(User.email == email)).scalar_one_or_none()
        return _to_record(row, UserRecord)

    def get_user_by_google_id(self, google_id: str) -> Optional[UserRecord]:
        row = db.session.execute(select(User).where(User.google_id == google_id)).scalar_one_or_none()
        return _to_record(row, UserRecord)

    def create_user(self, **values: Any) -> UserRecord:
        return self._insert(User, UserRecord, values)

    def update_user(self, user_id: int, **values: Any) -> Optional[UserRecord]:
        return self._update(User, UserRecord, user_id, values)

    # Preferences

    def get_user_preferences(self, user_id: int) -> Optional[PreferencesRecord]:
        row = db.session.execute(
            select(UserPreferences).where(UserPreferences.user_id == user_id)
        ).scalar_one_or_none()
        return _to_record(row, PreferencesRecord)

    def create_user_preferences(self, user_id: int, **values: Any) -> PreferencesRecord:
        values['user_id'] = user_id
        return self._insert(UserPreferences, PreferencesRecord, values)

    def update_user_preferences(self, preferences_id: int, **values: Any) -> Optional[PreferencesRecord]:
        values['updated_at'] = datetime.utcnow()
        return self._update(UserPreferences, PreferencesRecord, preferences_id, values)

    # Festivals

    def get_festival(self, festival_id: int) -> Optional[FestivalRecord]:
        return self._get(Festival, FestivalRecord, festival_id)

    def get_festivals_by_date(self, day: date) -> List[FestivalRecord]:
        if isinstance(day, datetime):
            day = day.date()
        stmt = select(Festival).where(Festival.date == day).order_by(Festival.id)
        return self._list(stmt, FestivalRecord)

    def get_festivals_by_religion(self, religion: str) -> List[FestivalRecord]:
        stmt = (
            select(Festival)
            .where(func.lower(Festival.religion) == religion.lower())
            .order_by(Festival.id)
        )
        return self._list(stmt, FestivalRecord)

    def get_all_festivals(self) -> List[FestivalRecord]:
        return self._list(select(Festival).order_by(Festival.id), FestivalRecord)

    def get_upcoming_festivals(
        self, religion: str, limit: int, today: Optional[date] = None
    ) -> List[FestivalRecord]:
        today = today or date.today()
        stmt = (
            select(Festival)
            .where(
                func.lower(Festival.religion) == religion.lower(),
                Festival.date >= today,
            )
            .order_by(Festival.date.asc(), Festival.id.asc())
            .limit(limit)
        )
        return self._list(stmt, FestivalRecord)

    def create_festival(self, **values: Any) -> FestivalRecord:
        if isinstance(values.get('date'), datetime):
            values['date'] = values['date'].date()
        return self._insert(Festival, FestivalRecord, values)

    # Rituals

    def get_ritual(self, ritual_id: int) -> Optional[RitualRecord]:
        return self._get(Ritual, RitualRecord, ritual_id)

    def get_rituals_by_festival(self, festival_id: int) -> List[RitualRecord]:
        stmt = select(Ritual).where(Ritual.festival_id == festival_id).order_by(Ritual.id)
        return self._list(stmt, RitualRecord)

    def get_rituals_by_religion(self, religion: str) -> List[RitualRecord]:
        stmt = (
            select(Ritual)
            .where(func.lower(Ritual.religion) == religion.lower())
            .order_by(Ritual.id)
        )
        return self._list(stmt, RitualRecord)

    def create_ritual(self, **values: Any) -> RitualRecord:
        return self._insert(Ritual, RitualRecord, values)

    def update_ritual(self, ritual_id: int, **values: Any) -> Optional[RitualRecord]:
        return self._update(Ritual, RitualRecord, ritual_id, values)

    # Bhajans

    def get_bhajan(self, bhajan_id: int) -> Optional[BhajanRecord]:
        return self._get(Bhajan, BhajanRecord, bhajan_id)

    def get_bhajans_by_festival(self, festival_id: int) -> List[BhajanRecord]:
        stmt = select(Bhajan).where(Bhajan.festival_id == festival_id).order_by(Bhajan.id)
        return self._list(stmt, BhajanRecord)

    def create_bhajan(self, **values: Any) -> BhajanRecord:
        return self._insert(Bhajan, BhajanRecord, values)

    # Contributions

    def get_contribution(self, contribution_id: int) -> Optional[ContributionRecord]:
        return self._get(Contribution, ContributionRecord, contribution_id)

    def get_contributions_by_user(self, user_id: int) -> List[ContributionRecord]:
        stmt = (
            select(Contribution)
            .where(Contribution.user_id == user_id)
            .order_by(Contribution.created_at.desc(), Contribution.id.desc())
        )
        return self._list(stmt, ContributionRecord)

    def get_contributions_by_status(self, status: str) -> List[ContributionRecord]:
        stmt = (
            select(Contribution)
            .where(Contribution.status == status)
            .order_by(Contribution.created_at.asc(), Contribution.id.asc())
        )
        return self._list(stmt, ContributionRecord)

    def create_contribution(self, **values: Any) -> ContributionRecord:
        return self._insert(Contribution, ContributionRecord, values)

    def update_contribution(self, contribution_id: int, **values: Any) -> Optional[ContributionRecord]:
        values['updated_at'] = datetime.utcnow()
        return self._update(Contribution, ContributionRecord, contribution_id, values)
