"""
Storage interface shared by the in-memory and SQLAlchemy backends.
"""

from __future__ import annotations

from dataclasses import fields
from datetime import date
from typing import Any, Dict, List, Optional, Protocol

from .records import (
    BhajanRecord,
    ContributionRecord,
    FestivalRecord,
    PreferencesRecord,
    RitualRecord,
    UserRecord,
)


class Storage(Protocol):
    """Interface for data access."""

    name: str

    # Users
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        ...

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    def get_user_by_google_id(self, google_id: str) -> Optional[UserRecord]:
        ...

    def create_user(self, **values: Any) -> UserRecord:
        ...

    def update_user(self, user_id: int, **values: Any) -> Optional[UserRecord]:
        ...

    # Preferences
    def get_user_preferences(self, user_id: int) -> Optional[PreferencesRecord]:
        ...

    def create_user_preferences(self, user_id: int, **values: Any) -> PreferencesRecord:
        ...

    def update_user_preferences(
        self, preferences_id: int, **values: Any
    ) -> Optional[PreferencesRecord]:
        ...

    # Festivals
    def get_festival(self, festival_id: int) -> Optional[FestivalRecord]:
        ...

    def get_festivals_by_date(self, day: date) -> List[FestivalRecord]:
        ...

    def get_festivals_by_religion(self, religion: str) -> List[FestivalRecord]:
        ...

    def get_all_festivals(self) -> List[FestivalRecord]:
        ...

    def get_upcoming_festivals(
        self, religion: str, limit: int, today: Optional[date] = None
    ) -> List[FestivalRecord]:
        ...

    def create_festival(self, **values: Any) -> FestivalRecord:
        ...

    # Rituals
    def get_ritual(self, ritual_id: int) -> Optional[RitualRecord]:
        ...

    def get_rituals_by_festival(self, festival_id: int) -> List[RitualRecord]:
        ...

    def get_rituals_by_religion(self, religion: str) -> List[RitualRecord]:
        ...

    def create_ritual(self, **values: Any) -> RitualRecord:
        ...

    def update_ritual(self, ritual_id: int, **values: Any) -> Optional[RitualRecord]:
        ...

    # Bhajans
    def get_bhajan(self, bhajan_id: int) -> Optional[BhajanRecord]:
        ...

    def get_bhajans_by_festival(self, festival_id: int) -> List[BhajanRecord]:
        ...

    def create_bhajan(self, **values: Any) -> BhajanRecord:
        ...

    # Contributions
    def get_contribution(self, contribution_id: int) -> Optional[ContributionRecord]:
        ...

    def get_contributions_by_user(self, user_id: int) -> List[ContributionRecord]:
        ...

    def get_contributions_by_status(self, status: str) -> List[ContributionRecord]:
        ...

    def create_contribution(self, **values: Any) -> ContributionRecord:
        ...

    def update_contribution(
        self, contribution_id: int, **values: Any
    ) -> Optional[ContributionRecord]:
        ...

    def reset(self) -> None:
        ...


def check_fields(record_cls, values: Dict[str, Any]) -> None:
    """Reject keys that are not columns of the record (or try to set the id)."""
    allowed = {f.name for f in fields(record_cls)} - {'id'}
    unknown = set(values) - allowed
    if unknown:
        raise ValueError(
            f"Unknown {record_cls.__name__} field(s): {', '.join(sorted(unknown))}"
        )
