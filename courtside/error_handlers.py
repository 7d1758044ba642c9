"""JSON error handlers for every blueprint."""

from flask import Blueprint, current_app, jsonify
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import HTTPException

from .errors import AppError

error_handlers_bp = Blueprint("error_handlers", __name__)

SERVER_ERROR = 500


def _error_response(kind, message, status_code):
    return jsonify({"error": kind, "message": message}), status_code


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Render application errors with their own status code."""
    if error.status_code >= SERVER_ERROR:
        current_app.logger.error(f"{error.kind}: {error.message}")
    else:
        current_app.logger.warning(f"{error.kind}: {error.message}")
    return _error_response(error.kind, error.message, error.status_code)


@error_handlers_bp.app_errorhandler(CSRFError)
def handle_csrf_error(e):
    """Handles CSRF errors raised for session-authenticated mutations."""
    current_app.logger.warning(f"CSRF Error: {e.description}")
    return _error_response("ValidationFailed", e.description, 400)


@error_handlers_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    """Handles routing errors such as unknown URLs or wrong methods."""
    return _error_response(e.name.replace(" ", ""), e.description, e.code)


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return _error_response("InternalError", "An unexpected error occurred.", 500)
