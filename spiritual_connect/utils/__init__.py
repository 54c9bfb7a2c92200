"""
Utilities Package

Validation, auth helpers, error handlers, metrics and the external service clients.
"""

from . import auth_utils
from . import validators
from . import error_handlers

__all__ = [
    'auth_utils',
    'validators',
    'error_handlers'
]
