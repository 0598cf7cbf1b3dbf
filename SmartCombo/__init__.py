"""SmartCombo - embedding-based category suggestions for smart combo boxes"""

from __future__ import annotations

__version__ = "0.1.0"

# Core ranking
from .core.similarity import EmbeddedText, RankedResult, cosine_similarity, find_closest
from .core.categories import CategoryIndex
from .core.embedding import EmbeddingModule

# Configuration
from .config.settings import Settings, get_settings, find_config_file
from .config.validator import ConfigValidator, ConfigValidationResult, validate_settings

# Errors
from .utils.errors import (
    SmartComboException, ConfigurationError, EmbeddingError, DimensionMismatchError
)

__all__ = [
    "__version__",

    # Core ranking
    "EmbeddedText",
    "RankedResult",
    "cosine_similarity",
    "find_closest",
    "CategoryIndex",
    "EmbeddingModule",

    # Configuration
    "Settings",
    "get_settings",
    "find_config_file",
    "ConfigValidator",
    "ConfigValidationResult",
    "validate_settings",

    # Errors
    "SmartComboException",
    "ConfigurationError",
    "EmbeddingError",
    "DimensionMismatchError",
]
