"""
Our Anime List - Custom Exceptions and Exception Handlers
"""
import structlog
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = structlog.get_logger('exceptions')


class OurAnimeListException(Exception):
    """Base exception for Our Anime List"""
    def __init__(self, message: str, code: str = "OUR_ANIME_LIST_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'success': False,
            'code': self.code,
            'message': self.message
        }


class DatabaseException(OurAnimeListException):
    """Backend failures while talking to the database. detail is logged, never returned to clients."""
    def __init__(self, message: str, detail=None):
        super().__init__(message, code="DATABASE_ERROR")
        self.detail = detail
        logger.error(f"Database error: {message}", detail=str(detail) if detail is not None else None)


class ConflictException(OurAnimeListException):
    """Uniqueness violations"""
    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")
        logger.info(f"Conflict: {message}")


class ValidationException(OurAnimeListException):
    """Validation-related exceptions"""
    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")
        logger.warning(f"Validation error: {message}")


class AuthenticationException(OurAnimeListException):
    """Authentication-related exceptions"""
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHORIZED")
        logger.warning(f"Authentication error: {message}")


class AuthorizationException(OurAnimeListException):
    """Authorization-related exceptions"""
    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code="FORBIDDEN")
        logger.warning(f"Authorization error: {message}")


def register_exception_handlers(app):
    """Register exception handlers with Flask app"""

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle HTTP exceptions"""
        return jsonify({
            'success': False,
            'code': e.name.upper().replace(' ', '_'),
            'message': e.description
        }), e.code

    @app.errorhandler(OurAnimeListException)
    def handle_base_exception(e):
        return jsonify(e.to_dict()), 400

    @app.errorhandler(DatabaseException)
    def handle_database_exception(e):
        return jsonify(e.to_dict()), 500

    @app.errorhandler(ConflictException)
    def handle_conflict_exception(e):
        return jsonify(e.to_dict()), 409

    @app.errorhandler(ValidationException)
    def handle_validation_exception(e):
        return jsonify(e.to_dict()), 400

    @app.errorhandler(AuthenticationException)
    def handle_auth_exception(e):
        return jsonify(e.to_dict()), 401

    @app.errorhandler(AuthorizationException)
    def handle_authorization_exception(e):
        return jsonify(e.to_dict()), 403

    @app.errorhandler(Exception)
    def handle_generic_exception(e):
        """Handle all other exceptions"""
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'code': 'INTERNAL_ERROR',
            'message': 'An unexpected error occurred'
        }), 500
