"""
Storage Package

FLOW OVERVIEW
- init_storage(app)
  • Build the backend named by STORAGE_BACKEND ('memory' or 'database') and attach it
    to app.extensions['storage']. Memory stores are seeded with sample data when
    SEED_SAMPLE_DATA is on; database tables are created on startup.
- get_storage()
  • Return the backend bound to the current app.
"""

from flask import current_app

from .base import Storage
from .database import DatabaseStorage
from .memory import MemoryStorage
from .seed import seed_sample_data

BACKENDS = {
    'memory': MemoryStorage,
    'database': DatabaseStorage,
}


def init_storage(app):
    """Create the configured storage backend for `app`."""
    backend_name = app.config.get('STORAGE_BACKEND', 'memory')
    if backend_name not in BACKENDS:
        raise ValueError(f"Unknown STORAGE_BACKEND '{backend_name}' (expected one of {sorted(BACKENDS)})")

    storage = BACKENDS[backend_name]()
    if backend_name == 'database':
        from ..models import db
        with app.app_context():
            db.create_all()
    elif app.config.get('SEED_SAMPLE_DATA', False):
        seed_sample_data(storage)

    app.extensions['storage'] = storage
    app.logger.info(f"Storage backend initialized: {backend_name}")
    return storage


def get_storage() -> Storage:
    """Storage backend for the current application."""
    return current_app.extensions['storage']


__all__ = [
    'Storage',
    'MemoryStorage',
    'DatabaseStorage',
    'init_storage',
    'get_storage',
    'seed_sample_data'
]
