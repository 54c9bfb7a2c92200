"""
Error Handlers

Every error leaves the API as JSON: {"message": "..."} with the matching status code.
"""

from flask import jsonify, current_app


def render_error(message, status_code):
    """JSON error body used by the global handlers"""
    return jsonify({'message': message}), status_code


def register_error_handlers(app):
    """Register error handlers with the Flask app"""

    @app.errorhandler(400)
    def bad_request(error):
        return render_error(getattr(error, 'description', None) or 'Bad request', 400)

    @app.errorhandler(401)
    def unauthorized(error):
        return render_error('Unauthorized', 401)

    @app.errorhandler(403)
    def forbidden(error):
        return render_error('Forbidden', 403)

    @app.errorhandler(404)
    def not_found(error):
        return render_error('Not found', 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return render_error('Method not allowed', 405)

    @app.errorhandler(500)
    def internal_error(error):
        if current_app.extensions.get('storage') is not None and current_app.extensions['storage'].name == 'database':
            from ..models import db
            db.session.rollback()
        return render_error('Something went wrong on our end. Please try again later.', 500)
