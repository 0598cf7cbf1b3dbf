"""Error handling for the SmartCombo API."""

import logging
from typing import Optional, Tuple, Dict, Any
from flask import jsonify, Flask, Response, request
from werkzeug.exceptions import HTTPException

from .pages import render_error

logger = logging.getLogger("SMARTCOMBO.Errors")


class APIError(Exception):
    """Base API error."""

    def __init__(self, message: str, status_code: int = 400, error_code: str = "API_ERROR"):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)


class ValidationError(APIError):
    """Validation error."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, 400, "VALIDATION_ERROR")
        self.details = details


def format_error_response(error: Exception, request_id: Optional[str] = None) -> Tuple[Dict[str, Any], int]:
    """Format error response."""
    if isinstance(error, APIError):
        return {
            "success": False,
            "error": error.error_code,
            "message": error.message,
            "details": getattr(error, "details", None),
            "request_id": request_id
        }, error.status_code

    elif isinstance(error, HTTPException):
        return {
            "success": False,
            "error": "HTTP_ERROR",
            "message": error.description or str(error),
            "request_id": request_id
        }, error.code or 400

    else:
        logger.error(f"Unhandled exception: {type(error).__name__}: {str(error)}", exc_info=error)
        return {
            "success": False,
            "error": "INTERNAL_SERVER_ERROR",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": request_id
        }, 500


def setup_error_handlers(app: Flask):
    """Register error handlers with Flask app."""

    @app.errorhandler(APIError)
    def handle_api_error(error):
        response, status = format_error_response(error, getattr(request, "request_id", None))
        return jsonify(response), status

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        response, status = format_error_response(error, getattr(request, "request_id", None))
        return jsonify(response), status

    @app.errorhandler(Exception)
    def handle_generic_error(error):
        request_id = getattr(request, "request_id", None)
        response, status = format_error_response(error, request_id)
        if wants_error_page():
            page = Response(render_error(request_id), status=status, mimetype="text/html")
            page.headers["Cache-Control"] = "no-store, no-cache"
            return page
        return jsonify(response), status

    def wants_error_page() -> bool:
        """Pages outside /api/ get the HTML error page unless debugging."""
        return not app.debug and not request.path.startswith("/api/")
