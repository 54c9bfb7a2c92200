"""
API Utilities Module

FLOW OVERVIEW
- APIRequestValidator
  • validate_json_request → parse/validate JSON and return (ok, data, error).
  • validate_payload → run a validators.* function and return (ok, cleaned, error).
- APIResponseFormatter
  • error(message, status, **extra) → (body, status) tuple with a JSON `message`.
  • server_error(message, exc) → logged 500 with database rollback.
  • records(items) → JSON-ready dicts from storage records.

Used by every blueprint so request parsing and error bodies look the same everywhere.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple
from flask import request, jsonify, current_app


class APIRequestValidator:
    """Handles common request validation logic."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def validate_json_request(self) -> Tuple[bool, Optional[Dict[str, Any]], Optional[Tuple[Any, int]]]:
        """
        Validate and parse a JSON object body.

        Returns:
            Tuple of (is_valid, data, error_response)
        """
        data = request.get_json(silent=True)
        if data is None:
            self.logger.warning(f"Invalid or missing JSON body on {request.path}")
            return False, None, response_formatter.error('Invalid request format. JSON payload required.', 400)

        if not isinstance(data, dict):
            self.logger.warning(f"Invalid data type on {request.path}: {type(data).__name__}")
            return False, None, response_formatter.error('Request data must be a JSON object.', 400)

        return True, data, None

    def validate_payload(self, validator: Callable) -> Tuple[bool, Optional[Dict[str, Any]], Optional[Tuple[Any, int]]]:
        """
        Parse the JSON body and run `validator` over it.

        Returns:
            Tuple of (is_valid, cleaned_data, error_response)
        """
        is_valid, data, error = self.validate_json_request()
        if not is_valid:
            return False, None, error

        result = validator(data)
        if not result.is_valid:
            self.logger.info(f"Rejected payload on {request.path}: {result.error_message}")
            return False, None, response_formatter.error(result.error_message, 400)

        return True, result.sanitized_value, None


class APIResponseFormatter:
    """Handles common response formatting logic."""

    @staticmethod
    def error(message: str, status_code: int, **extra):
        """JSON error body with a human readable message."""
        body = {'message': message}
        body.update(extra)
        return jsonify(body), status_code

    @staticmethod
    def server_error(message: str, exc: Exception):
        """Log an unexpected failure and answer 500, rolling back the database session."""
        current_app.logger.error(f"{message}: {exc}", exc_info=True)
        storage = current_app.extensions.get('storage')
        if storage is not None and storage.name == 'database':
            from ..models import db
            db.session.rollback()
        return jsonify({'message': message}), 500

    @staticmethod
    def records(items: Iterable):
        return [item.as_dict() for item in items]


# Global instances
request_validator = APIRequestValidator()
response_formatter = APIResponseFormatter()
