"""REST API and pages for the SmartCombo suggestion service."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from .. import __version__
from ..config.settings import Settings
from ..config.validator import ConfigValidationResult, ConfigValidator
from ..core.categories import CategoryIndex
from ..utils.health_checker import HealthChecker
from ..utils.request_validation import setup_request_validation
from .errors import setup_error_handlers
from .pages import render_error, render_home, render_smart_paste
from .schemas import SuggestionRequest, validate_request_schema

logger = logging.getLogger("SMARTCOMBO.API")


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def add_security_headers(response):
    """Add security headers to response."""
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


@dataclass
class APIResponse:
    """Standardized API envelope for service endpoints."""
    success: bool
    data: Any
    error: Optional[str] = None
    request_id: Optional[str] = None
    timestamp: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "data": self.data,
            "error": self.error,
            "request_id": self.request_id,
            "timestamp": self.timestamp or _utcnow(),
        }


class SmartComboAPIServer:
    """Flask application hosting the smart combo box endpoint."""

    def __init__(
        self,
        index: CategoryIndex,
        settings: Optional[Settings] = None,
        validation: Optional[ConfigValidationResult] = None,
    ):
        self.index = index
        self.settings = settings or Settings()
        self.validation = validation if validation is not None else ConfigValidator().validate(self.settings)
        self.app: Optional[Flask] = None

    def create_flask_app(self) -> Flask:
        """Create the Flask application."""
        app = Flask(__name__)
        app.json.sort_keys = False  # type: ignore[attr-defined]

        CORS(app, resources={r"/api/*": {"origins": self.settings.api.cors_origins}})

        app.health_checker = HealthChecker(self.index, self.validation)  # type: ignore[attr-defined]

        setup_error_handlers(app)
        self._register_middleware(app)
        setup_request_validation(app, max_content_length=self.settings.api.max_content_length)
        self._register_routes(app)

        self.app = app
        return app

    def _register_middleware(self, app: Flask) -> None:
        """Register middleware."""

        @app.before_request
        def before_request():
            request.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())  # type: ignore[attr-defined]

        @app.after_request
        def after_request(response):
            response = add_security_headers(response)
            if hasattr(request, "request_id"):
                response.headers["X-Request-ID"] = request.request_id  # type: ignore[attr-defined]
            return response

    def _register_routes(self, app: Flask) -> None:
        """Register pages and API routes."""
        suggestions = self.settings.suggestions

        @app.route("/", methods=["GET"])
        def home():
            """Home page; shows the first startup configuration error, if any."""
            return render_home(
                config_error=self.validation.first_error,
                endpoint_path=suggestions.endpoint_path,
                max_results=suggestions.default_max_results,
            )

        @app.route("/error", methods=["GET"])
        def error():
            html = render_error(getattr(request, "request_id", None))
            response = Response(html, mimetype="text/html")
            response.headers["Cache-Control"] = "no-store, no-cache"
            return response

        @app.route("/smartpaste", methods=["GET"])
        def smart_paste():
            return render_smart_paste()

        @app.route(suggestions.endpoint_path, methods=["GET", "POST"])
        @validate_request_schema(SuggestionRequest)
        def suggest_categories():
            """Rank the expense categories against the search text."""
            data: SuggestionRequest = request.validated_data  # type: ignore[attr-defined]
            max_results = data.max_results or suggestions.default_max_results
            max_results = min(max_results, suggestions.max_results_limit)

            results = self.index.suggest(data.search_text, max_results, data.min_similarity)
            payload: List[Dict[str, Any]] = [r.to_dict() for r in results]
            logger.debug(
                f"[{getattr(request, 'request_id', None)}] {len(payload)} suggestions "
                f"for '{data.search_text}' (max={max_results}, min={data.min_similarity})"
            )
            return jsonify(payload), 200

        @app.route("/health", methods=["GET"])
        def health():
            """Service health check."""
            health_data = app.health_checker.check_all()  # type: ignore[attr-defined]
            return jsonify(APIResponse(
                success=True,
                data={
                    "status": health_data.get("overall_status", "unknown"),
                    "version": __version__,
                    "checks": health_data.get("checks", {}),
                    "timestamp": _utcnow(),
                },
                request_id=getattr(request, "request_id", None)
            ).to_dict()), 200

        @app.route("/ready", methods=["GET"])
        def ready():
            """Service readiness check."""
            is_ready = app.health_checker.is_ready()  # type: ignore[attr-defined]
            return jsonify({
                "success": is_ready,
                "ready": is_ready,
                "message": "Service is ready" if is_ready else "Service is not ready",
                "request_id": getattr(request, "request_id", None)
            }), 200 if is_ready else 503

    def run(self, debug: bool = False):
        """Run the development server."""
        if self.app is None:
            self.create_flask_app()

        host, port = self.settings.api.host, self.settings.api.port
        logger.info(f"Starting SmartCombo server on {host}:{port}")
        if self.app is not None:
            self.app.run(host=host, port=port, debug=debug, use_reloader=False)


class SmartComboAPIClient:
    """Client for the SmartCombo API."""

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = None

    def _get_session(self):
        """Get or create session."""
        if self.session is None:
            self.session = requests.Session()
        return self.session

    def health_check(self) -> bool:
        """Check if API is healthy."""
        try:
            resp = self._get_session().get(f"{self.base_url}/health", timeout=2)
            return resp.status_code == 200
        except requests.RequestException:
            return False

    def suggest(
        self,
        search_text: str,
        max_results: Optional[int] = None,
        min_similarity: Optional[float] = None,
        path: str = "/api/suggestions/accounting-categories",
    ) -> List[Dict[str, Any]]:
        """Fetch category suggestions for ``search_text``."""
        params: Dict[str, Any] = {"searchText": search_text}
        if max_results is not None:
            params["maxResults"] = str(max_results)
        if min_similarity is not None:
            # repr() never uses a locale-specific decimal separator
            params["minSimilarity"] = repr(float(min_similarity))
        resp = self._get_session().get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()


def create_app(settings: Settings, index: CategoryIndex,
               validation: Optional[ConfigValidationResult] = None) -> Flask:
    """Factory function to create the Flask app."""
    server = SmartComboAPIServer(index, settings=settings, validation=validation)
    return server.create_flask_app()


__all__ = [
    "APIResponse",
    "SmartComboAPIServer",
    "SmartComboAPIClient",
    "create_app",
]
