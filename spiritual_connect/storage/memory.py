"""
Dict-backed storage for development and tests.
"""

from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .base import check_fields
from .records import (
    BhajanRecord,
    ContributionRecord,
    FestivalRecord,
    PreferencesRecord,
    RitualRecord,
    UserRecord,
)


def _same_religion(a: str, b: str) -> bool:
    return (a or '').lower() == (b or '').lower()


class MemoryStorage:
    """Simple in-memory store. Ids come from per-table counters starting at 1."""

    name = 'memory'

    def __init__(self):
        self.users: Dict[int, UserRecord] = {}
        self.preferences: Dict[int, PreferencesRecord] = {}
        self.festivals: Dict[int, FestivalRecord] = {}
        self.rituals: Dict[int, RitualRecord] = {}
        self.bhajans: Dict[int, BhajanRecord] = {}
        self.contributions: Dict[int, ContributionRecord] = {}
        self._reset_counters()

    def _reset_counters(self) -> None:
        self._ids = {
            table: itertools.count(1)
            for table in ('users', 'preferences', 'festivals', 'rituals', 'bhajans', 'contributions')
        }

    def _next_id(self, table: str) -> int:
        return next(self._ids[table])

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.users.clear()
        self.preferences.clear()
        self.festivals.clear()
        self.rituals.clear()
        self.bhajans.clear()
        self.contributions.clear()
        self._reset_counters()

    # Users

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def get_user_by_google_id(self, google_id: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.google_id == google_id:
                return user
        return None

    def create_user(self, **values: Any) -> UserRecord:
        check_fields(UserRecord, values)
        for existing in self.users.values():
            if existing.email == values.get('email'):
                raise ValueError(f"User with email {existing.email} already exists")
            if existing.google_id == values.get('google_id'):
                raise ValueError("User with this Google id already exists")
        user = UserRecord(id=self._next_id('users'), **values)
        self.users[user.id] = user
        return user

    def update_user(self, user_id: int, **values: Any) -> Optional[UserRecord]:
        check_fields(UserRecord, values)
        user = self.users.get(user_id)
        if not user:
            return None
        user = replace(user, **values)
        self.users[user_id] = user
        return user

    # Preferences

    def get_user_preferences(self, user_id: int) -> Optional[PreferencesRecord]:
        for prefs in self.preferences.values():
            if prefs.user_id == user_id:
                return prefs
        return None

    def create_user_preferences(self, user_id: int, **values: Any) -> PreferencesRecord:
        check_fields(PreferencesRecord, values)
        if self.get_user_preferences(user_id):
            raise ValueError(f"Preferences for user {user_id} already exist")
        now = datetime.utcnow()
        values.setdefault('created_at', now)
        values.setdefault('updated_at', now)
        prefs = PreferencesRecord(id=self._next_id('preferences'), user_id=user_id, **values)
        self.preferences[prefs.id] = prefs
        return prefs

    def update_user_preferences(self, preferences_id: int, **values: Any) -> Optional[PreferencesRecord]:
        check_fields(PreferencesRecord, values)
        prefs = self.preferences.get(preferences_id)
        if not prefs:
            return None
        values['updated_at'] = datetime.utcnow()
        prefs = replace(prefs, **values)
        self.preferences[preferences_id] = prefs
        return prefs

    # Festivals

    def get_festival(self, festival_id: int) -> Optional[FestivalRecord]:
        return self.festivals.get(festival_id)

    def get_festivals_by_date(self, day: date) -> List[FestivalRecord]:
        if isinstance(day, datetime):
            day = day.date()
        return [f for f in self.festivals.values() if f.date == day]

    def get_festivals_by_religion(self, religion: str) -> List[FestivalRecord]:
        return [f for f in self.festivals.values() if _same_religion(f.religion, religion)]

    def get_all_festivals(self) -> List[FestivalRecord]:
        return list(self.festivals.values())

    def get_upcoming_festivals(
        self, religion: str, limit: int, today: Optional[date] = None
    ) -> List[FestivalRecord]:
        today = today or date.today()
        upcoming = [
            f for f in self.festivals.values()
            if f.date >= today and _same_religion(f.religion, religion)
        ]
        upcoming.sort(key=lambda f: (f.date, f.id))
        return upcoming[:limit]

    def create_festival(self, **values: Any) -> FestivalRecord:
        check_fields(FestivalRecord, values)
        if isinstance(values.get('date'), datetime):
            values['date'] = values['date'].date()
        festival = FestivalRecord(id=self._next_id('festivals'), **values)
        self.festivals[festival.id] = festival
        return festival

    # Rituals

    def get_ritual(self, ritual_id: int) -> Optional[RitualRecord]:
        return self.rituals.get(ritual_id)

    def get_rituals_by_festival(self, festival_id: int) -> List[RitualRecord]:
        return [r for r in self.rituals.values() if r.festival_id == festival_id]

    def get_rituals_by_religion(self, religion: str) -> List[RitualRecord]:
        return [r for r in self.rituals.values() if _same_religion(r.religion, religion)]

    def create_ritual(self, **values: Any) -> RitualRecord:
        check_fields(RitualRecord, values)
        ritual = RitualRecord(id=self._next_id('rituals'), **values)
        self.rituals[ritual.id] = ritual
        return ritual

    def update_ritual(self, ritual_id: int, **values: Any) -> Optional[RitualRecord]:
        check_fields(RitualRecord, values)
        ritual = self.rituals.get(ritual_id)
        if not ritual:
            return None
        ritual = replace(ritual, **values)
        self.rituals[ritual_id] = ritual
        return ritual

    # Bhajans

    def get_bhajan(self, bhajan_id: int) -> Optional[BhajanRecord]:
        return self.bhajans.get(bhajan_id)

    def get_bhajans_by_festival(self, festival_id: int) -> List[BhajanRecord]:
        return [b for b in self.bhajans.values() if b.festival_id == festival_id]

    def create_bhajan(self, **values: Any) -> BhajanRecord:
        check_fields(BhajanRecord, values)
        bhajan = BhajanRecord(id=self._next_id('bhajans'), **values)
        self.bhajans[bhajan.id] = bhajan
        return bhajan

    # Contributions

    def get_contribution(self, contribution_id: int) -> Optional[ContributionRecord]:
        return self.contributions.get(contribution_id)

    def get_contributions_by_user(self, user_id: int) -> List[ContributionRecord]:
        items = [c for c in self.contributions.values() if c.user_id == user_id]
        items.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        return items

    def get_contributions_by_status(self, status: str) -> List[ContributionRecord]:
        items = [c for c in self.contributions.values() if c.status == status]
        items.sort(key=lambda c: (c.created_at, c.id))
        return items

    def create_contribution(self, **values: Any) -> ContributionRecord:
        check_fields(ContributionRecord, values)
        now = datetime.utcnow()
        values.setdefault('created_at', now)
        values.setdefault('updated_at', now)
        contribution = ContributionRecord(id=self._next_id('contributions'), **values)
        self.contributions[contribution.id] = contribution
        return contribution

    def update_contribution(self, contribution_id: int, **values: Any) -> Optional[ContributionRecord]:
        check_fields(ContributionRecord, values)
        contribution = self.contributions.get(contribution_id)
        if not contribution:
            return None
        values['updated_at'] = datetime.utcnow()
        contribution = replace(contribution, **values)
        self.contributions[contribution_id] = contribution
        return contribution
