"""
Standardized API response envelope: {"success", "message", "data"}.
"""
from flask import jsonify


def _respond(success: bool, data, message: str, status_code: int):
    return jsonify({
        "success": success,
        "message": message,
        "data": {} if data is None else data,
    }), status_code


def success_response(data=None, message="", status_code=200):
    """Return standardized success response. data may be a dict or a list."""
    return _respond(True, data, message, status_code)


def error_response(message="An error occurred", status_code=400, data=None):
    """Return standardized error response."""
    return _respond(False, data, message, status_code)
