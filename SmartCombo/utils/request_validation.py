"""Request size validation middleware."""

from typing import Optional, Tuple
import logging
from flask import Flask, request

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONTENT_LENGTH = 1024 * 1024  # 1MB


def setup_request_validation(app: Flask,
                             max_content_length: Optional[int] = None) -> None:
    """Setup request validation middleware.

    Args:
        app: Flask application
        max_content_length: Maximum request size in bytes
    """
    max_size = max_content_length or DEFAULT_MAX_CONTENT_LENGTH
    app.config["MAX_CONTENT_LENGTH"] = max_size

    @app.before_request
    def validate_request() -> Optional[Tuple]:
        """Reject oversized requests before they reach a view."""
        content_length = request.content_length
        if content_length and content_length > max_size:
            logger.warning(f"Request too large: {content_length} bytes")
            return {
                "success": False,
                "error": "PAYLOAD_TOO_LARGE",
                "message": f"Request exceeds {max_size} bytes limit",
                "request_id": getattr(request, "request_id", None)
            }, 413
        return None
