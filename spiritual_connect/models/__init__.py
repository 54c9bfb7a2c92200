"""
Database Models Package

FLOW OVERVIEW
- Centralizes SQLAlchemy DB instance and model imports for convenient usage.
- Exposes: db, User, UserPreferences, Festival, Ritual, Bhajan, Contribution.
"""

from .database import db
from .user import User, UserPreferences
from .festival import Festival, Ritual, Bhajan
from .contribution import Contribution, CONTRIBUTION_STATUSES

__all__ = [
    'db',
    'User',
    'UserPreferences',
    'Festival',
    'Ritual',
    'Bhajan',
    'Contribution',
    'CONTRIBUTION_STATUSES'
]
