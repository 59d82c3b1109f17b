"""
Global error handler for Flask application.
"""
import logging
from werkzeug.exceptions import HTTPException
from .exceptions import IngestError, EmptyInputError
from .response_wrapper import error_response

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Register global error handlers."""

    @app.errorhandler(IngestError)
    def ingest_error(e):
        if isinstance(e, EmptyInputError):
            return error_response(e.message or "No data found", e.status_code)
        if e.status_code >= 500:
            logger.error("%s: %s", type(e).__name__, e.message)
        return error_response(e.message or type(e).__name__, e.status_code)

    @app.errorhandler(400)
    def bad_request(e):
        return error_response(str(e) or "Bad request", 400)

    @app.errorhandler(404)
    def not_found(e):
        return error_response("Resource not found", 404)

    @app.errorhandler(413)
    def too_large(e):
        return error_response("Uploaded file is too large", 413)

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception("Internal server error")
        return error_response("Internal server error", 500)

    @app.errorhandler(Exception)
    def handle_exception(e):
        if isinstance(e, HTTPException):
            return error_response(e.description or e.name, e.code)
        logger.exception("Unhandled exception")
        return error_response(str(e) if str(e) else "An unexpected error occurred", 500)
