"""Health and readiness checks for production deployments."""

from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class HealthChecker:
    """Monitor the category index and startup configuration."""

    def __init__(self, index: Any, validation: Optional[Any] = None):
        """Initialize health checker.

        Args:
            index: CategoryIndex serving suggestions
            validation: ConfigValidationResult produced at startup
        """
        self.index = index
        self.validation = validation

    def check_categories(self) -> Dict[str, Any]:
        """Check the category index is populated."""
        try:
            count = len(self.index)
            if count == 0:
                return {"status": "unhealthy", "categories": 0}
            return {
                "status": "healthy",
                "categories": count,
                "dimension": self.index.dimension,
            }
        except Exception as e:
            logger.error(f"Category health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}

    def check_embedding(self) -> Dict[str, Any]:
        """Check the embedding model is loaded."""
        embedder = getattr(self.index, "embedder", None)
        if embedder is None:
            return {"status": "unavailable"}
        loaded = getattr(embedder, "is_loaded", True)
        return {
            "status": "healthy" if loaded else "degraded",
            "model": getattr(embedder, "model_name", "unknown"),
            "model_loaded": loaded,
        }

    def check_config(self) -> Dict[str, Any]:
        """Report startup configuration problems."""
        if self.validation is None:
            return {"status": "unknown"}
        if self.validation.is_valid:
            return {"status": "healthy", "warnings": len(self.validation.warnings)}
        # Suggestions still work without an inference backend
        return {"status": "degraded", "error": self.validation.first_error}

    def check_all(self) -> Dict[str, Any]:
        """Run all health checks."""
        checks = {
            "categories": self.check_categories(),
            "embedding": self.check_embedding(),
            "config": self.check_config(),
        }

        statuses = [c.get("status") for c in checks.values()]
        if all(s in ("healthy", "available") for s in statuses):
            overall_status = "healthy"
        elif any(s == "unhealthy" for s in statuses):
            overall_status = "unhealthy"
        else:
            overall_status = "degraded"

        return {
            "overall_status": overall_status,
            "checks": checks,
            "ready_for_traffic": checks["categories"]["status"] == "healthy",
        }

    def is_ready(self) -> bool:
        """Check if the service can answer suggestion requests."""
        try:
            return self.check_all().get("ready_for_traffic", False)
        except Exception as e:
            logger.error(f"Ready check failed: {e}")
            return False
