"""
Storage contract tests.

Every test runs against both MemoryStorage and DatabaseStorage through the
`storage` fixture, so the two backends cannot drift apart.
"""

from datetime import date, timedelta

import pytest

from conftest import bhajan_values, festival_values, ritual_values
from spiritual_connect.storage import seed_sample_data


def _user(storage, **overrides):
    values = {'username': 'devotee', 'email': 'devotee@example.com', 'google_id': 'g-1'}
    values.update(overrides)
    return storage.create_user(**values)


class TestUsers:
    """User lookups and updates"""

    def test_create_and_lookup(self, storage):
        user = _user(storage, first_name='Asha')

        assert user.id is not None
        assert storage.get_user(user.id).email == 'devotee@example.com'
        assert storage.get_user_by_email('devotee@example.com').id == user.id
        assert storage.get_user_by_google_id('g-1').id == user.id
        assert storage.get_user(user.id).first_name == 'Asha'

    def test_missing_user(self, storage):
        assert storage.get_user(999) is None
        assert storage.get_user_by_email('nobody@example.com') is None
        assert storage.get_user_by_google_id('nope') is None

    def test_update_user(self, storage):
        user = _user(storage)
        updated = storage.update_user(user.id, first_name='Meera', last_name='Iyer')

        assert updated.first_name == 'Meera'
        assert updated.last_name == 'Iyer'
        assert storage.get_user(user.id).first_name == 'Meera'

    def test_update_missing_user_returns_none(self, storage):
        assert storage.update_user(42, first_name='Ghost') is None

    def test_unknown_field_rejected(self, storage):
        with pytest.raises(ValueError):
            storage.create_user(username='x', email='x@example.com', google_id='g-x', nickname='x')

    def test_ids_are_unique(self, storage):
        first = _user(storage)
        second = _user(storage, email='other@example.com', google_id='g-2')
        assert first.id != second.id


class TestPreferences:
    """One preferences row per user"""

    def test_create_and_get(self, storage):
        user = _user(storage)
        prefs = storage.create_user_preferences(
            user.id, primary_religion='Hinduism', languages=['English', 'Hindi']
        )

        fetched = storage.get_user_preferences(user.id)
        assert fetched.id == prefs.id
        assert fetched.primary_religion == 'Hinduism'
        assert fetched.languages == ['English', 'Hindi']
        assert fetched.secondary_interests == []

    def test_update(self, storage):
        user = _user(storage)
        prefs = storage.create_user_preferences(user.id, primary_religion='Hinduism')

        updated = storage.update_user_preferences(prefs.id, primary_religion='Buddhism', festival_reminder_days=7)

        assert updated.primary_religion == 'Buddhism'
        assert updated.festival_reminder_days == 7
        assert updated.updated_at >= prefs.updated_at

    def test_missing(self, storage):
        assert storage.get_user_preferences(1) is None
        assert storage.update_user_preferences(99, primary_religion='Jainism') is None


class TestFestivals:
    """Festival queries"""

    def test_get_and_list(self, storage):
        diwali = storage.create_festival(**festival_values())
        storage.create_festival(**festival_values(name='Vesak', religion='Buddhism'))

        assert storage.get_festival(diwali.id).name == 'Diwali'
        assert storage.get_festival(999) is None
        assert {f.name for f in storage.get_all_festivals()} == {'Diwali', 'Vesak'}

    def test_by_religion_is_case_insensitive(self, storage):
        storage.create_festival(**festival_values())
        storage.create_festival(**festival_values(name='Vesak', religion='Buddhism'))

        names = [f.name for f in storage.get_festivals_by_religion('hinduism')]
        assert names == ['Diwali']

    def test_by_date(self, storage):
        today = date.today()
        storage.create_festival(**festival_values(name='Today Fest', date=today))
        storage.create_festival(**festival_values(name='Later Fest', date=today + timedelta(days=3)))

        assert [f.name for f in storage.get_festivals_by_date(today)] == ['Today Fest']

    def test_upcoming_sorted_filtered_and_limited(self, storage):
        today = date(2026, 1, 1)
        storage.create_festival(**festival_values(name='Past', date=today - timedelta(days=1)))
        storage.create_festival(**festival_values(name='Third', date=today + timedelta(days=30)))
        storage.create_festival(**festival_values(name='First', date=today))
        storage.create_festival(**festival_values(name='Second', date=today + timedelta(days=5)))
        storage.create_festival(**festival_values(name='Other Faith', religion='Sikhism', date=today))

        upcoming = storage.get_upcoming_festivals('Hinduism', 2, today=today)
        assert [f.name for f in upcoming] == ['First', 'Second']

        everything = storage.get_upcoming_festivals('Hinduism', 10, today=today)
        assert [f.name for f in everything] == ['First', 'Second', 'Third']

    def test_date_serializes_as_iso(self, storage):
        festival = storage.create_festival(**festival_values(date=date(2026, 11, 8)))
        assert festival.as_dict()['date'] == '2026-11-08'


class TestRitualsAndBhajans:
    """Ritual and bhajan queries"""

    def test_rituals_by_festival_and_religion(self, storage):
        diwali = storage.create_festival(**festival_values())
        ritual = storage.create_ritual(festival_id=diwali.id, **ritual_values())
        storage.create_ritual(**ritual_values(title='Metta Meditation', religion='Buddhism'))

        assert [r.id for r in storage.get_rituals_by_festival(diwali.id)] == [ritual.id]
        assert [r.title for r in storage.get_rituals_by_religion('HINDUISM')] == ['Lakshmi Puja']
        assert storage.get_ritual(ritual.id).steps == ['Clean the altar', 'Light the diyas', 'Offer sweets']
        assert storage.get_ritual(999) is None

    def test_update_ritual(self, storage):
        ritual = storage.create_ritual(**ritual_values())
        updated = storage.update_ritual(ritual.id, verified=True)

        assert updated.verified is True
        assert storage.update_ritual(999, verified=True) is None

    def test_bhajans(self, storage):
        diwali = storage.create_festival(**festival_values())
        bhajan = storage.create_bhajan(festival_id=diwali.id, **bhajan_values())

        assert storage.get_bhajan(bhajan.id).youtube_url == 'https://www.youtube.com/watch?v=abc123'
        assert [b.id for b in storage.get_bhajans_by_festival(diwali.id)] == [bhajan.id]
        assert storage.get_bhajans_by_festival(999) == []
        assert storage.get_bhajan(999) is None


class TestContributions:
    """Contribution queries and moderation updates"""

    def test_by_user_newest_first(self, storage):
        user = _user(storage)
        first = storage.create_contribution(user_id=user.id, title='First', religion='Hinduism')
        second = storage.create_contribution(user_id=user.id, title='Second', religion='Hinduism')

        assert [c.id for c in storage.get_contributions_by_user(user.id)] == [second.id, first.id]

    def test_by_status(self, storage):
        user = _user(storage)
        pending = storage.create_contribution(user_id=user.id, title='Pending', religion='Hinduism')
        verified = storage.create_contribution(user_id=user.id, title='Verified', religion='Hinduism')
        storage.update_contribution(verified.id, status='verified')

        assert [c.id for c in storage.get_contributions_by_status('pending')] == [pending.id]
        assert [c.id for c in storage.get_contributions_by_status('verified')] == [verified.id]

    def test_update_contribution(self, storage):
        user = _user(storage)
        contribution = storage.create_contribution(user_id=user.id, title='Doc', religion='Hinduism')

        updated = storage.update_contribution(contribution.id, status='rejected')

        assert updated.status == 'rejected'
        assert updated.updated_at >= contribution.updated_at
        assert storage.update_contribution(999, status='verified') is None

    def test_default_status_is_pending(self, storage):
        user = _user(storage)
        contribution = storage.create_contribution(user_id=user.id, title='Doc', religion='Hinduism')
        assert contribution.status == 'pending'


class TestSeedAndReset:
    """Sample data loader"""

    def test_seed_counts(self, storage):
        counts = seed_sample_data(storage, with_demo_user=True)

        assert counts == {'festivals': 5, 'rituals': 2, 'bhajans': 3, 'users': 1, 'contributions': 1}
        diwali = storage.get_festivals_by_religion('Hinduism')[0]
        assert diwali.name == 'Diwali'
        assert len(storage.get_rituals_by_festival(diwali.id)) == 2
        assert storage.get_user_by_email('test@example.com') is not None

    def test_reset_clears_everything(self, storage):
        seed_sample_data(storage)
        storage.reset()

        assert storage.get_all_festivals() == []


class TestSchemaConstraints:
    """Constraints enforced by the relational schema"""

    def test_unknown_status_rejected(self, db_session):
        from sqlalchemy.exc import IntegrityError
        from spiritual_connect.models import Contribution, User

        user = User(username='a', email='a@example.com', google_id='g-a')
        db_session.add(user)
        db_session.commit()

        db_session.add(Contribution(user_id=user.id, title='Doc', religion='Hinduism', status='approved'))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_email_is_unique(self, db_session):
        from sqlalchemy.exc import IntegrityError
        from spiritual_connect.models import User

        db_session.add(User(username='a', email='same@example.com', google_id='g-1'))
        db_session.add(User(username='b', email='same@example.com', google_id='g-2'))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_memory_backend_rejects_duplicate_email(self, app_context, app):
        storage = app.extensions['storage']
        _user(storage)
        with pytest.raises(ValueError):
            _user(storage, google_id='g-2')
