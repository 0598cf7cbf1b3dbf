"""Centralized configuration for SmartCombo.

Supports a shared JSON config file, environment variables, and programmatic overrides.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..utils.errors import ConfigurationError

logger = logging.getLogger("SMARTCOMBO.Config")

CONFIG_FILE_NAME = "RepoSharedConfig.json"
CONFIG_PATH_ENV_VAR = "SMARTCOMBO_CONFIG_FILE_PATH"

DEFAULT_EXPENSE_CATEGORIES = [
    "Groceries", "Utilities", "Rent", "Mortgage", "Car Payment", "Car Insurance",
    "Health Insurance", "Life Insurance", "Home Insurance", "Gas",
    "Public Transportation", "Dining Out", "Entertainment", "Travel", "Clothing",
    "Electronics", "Home Improvement", "Gifts", "Charity", "Education",
    "Childcare", "Pet Care", "Other",
]


@dataclass
class EmbeddingConfig:
    """Local embedding model configuration."""
    model_name: str = "all-MiniLM-L6-v2"
    normalize: bool = True
    batch_size: int = 32
    device: str = "cpu"  # "cpu" or "cuda"


@dataclass
class InferenceConfig:
    """Inference backend used by Smart Paste."""
    backend: str = "openai"
    api_key: Optional[str] = None
    endpoint: Optional[str] = None
    deployment_name: Optional[str] = None


@dataclass
class SuggestionConfig:
    """Smart combo box suggestion configuration."""
    categories: List[str] = field(default_factory=lambda: list(DEFAULT_EXPENSE_CATEGORIES))
    default_max_results: int = 10
    max_results_limit: int = 100
    endpoint_path: str = "/api/suggestions/accounting-categories"


@dataclass
class APIConfig:
    """HTTP server configuration."""
    host: str = "0.0.0.0"
    port: int = 8000
    max_content_length: int = 1024 * 1024  # 1MB
    cors_origins: str = "*"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    format: str = "standard"  # "standard" or "json"
    file_path: Optional[str] = None


@dataclass
class Settings:
    """Master configuration for SmartCombo."""
    embedding: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    inference: InferenceConfig = field(default_factory=InferenceConfig)
    suggestions: SuggestionConfig = field(default_factory=SuggestionConfig)
    api: APIConfig = field(default_factory=APIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def to_safe_dict(self) -> Dict[str, Any]:
        """Dictionary with secrets masked, safe for API responses."""
        data = self.to_dict()
        if data["inference"].get("api_key"):
            data["inference"]["api_key"] = "***"
        return data

    @classmethod
    def load(cls, path: str) -> Settings:
        """Load config from a JSON file.

        Raises:
            ConfigurationError: If the file is missing or not a JSON object.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Config file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Config file is not valid JSON: {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must contain a JSON object: {path}")

        config = cls()
        for key, value in data.items():
            if hasattr(config, key) and isinstance(value, dict):
                setattr(config, key, cls._update_dataclass(getattr(config, key), value))
        config.source_path = str(path)

        logger.info(f"Config loaded from {path}")
        return config

    @staticmethod
    def _update_dataclass(obj: Any, data: Dict[str, Any]) -> Any:
        """Recursively update dataclass from dict."""
        for key, value in data.items():
            if hasattr(obj, key):
                current = getattr(obj, key)
                if hasattr(current, "__dataclass_fields__") and isinstance(value, dict):
                    setattr(obj, key, Settings._update_dataclass(current, value))
                else:
                    setattr(obj, key, value)
        return obj

    def apply_env(self) -> Settings:
        """Override fields from environment variables with safe parsing."""

        def safe_int(key: str) -> Optional[int]:
            val = os.getenv(key)
            if val is not None:
                try:
                    return int(val)
                except ValueError:
                    logger.warning(f"Invalid int for {key}={val}, ignoring")
            return None

        def safe_bool(key: str, default: bool) -> bool:
            val = os.getenv(key)
            if val is not None:
                return val.lower() in ("1", "true", "yes", "on")
            return default

        def safe_str(key: str) -> Optional[str]:
            val = os.getenv(key)
            return val if val else None

        # Inference
        if (key := safe_str("SMARTCOMBO_API_KEY")) is not None:
            self.inference.api_key = key
        if (endpoint := safe_str("SMARTCOMBO_INFERENCE_ENDPOINT")) is not None:
            self.inference.endpoint = endpoint
        if (deployment := safe_str("SMARTCOMBO_INFERENCE_DEPLOYMENT")) is not None:
            self.inference.deployment_name = deployment

        # Embedding
        if (model := safe_str("SMARTCOMBO_EMBEDDING_MODEL")) is not None:
            self.embedding.model_name = model
        if (device := safe_str("SMARTCOMBO_EMBEDDING_DEVICE")) is not None:
            self.embedding.device = device
        if (batch_size := safe_int("SMARTCOMBO_EMBEDDING_BATCH_SIZE")) is not None:
            self.embedding.batch_size = batch_size
        self.embedding.normalize = safe_bool("SMARTCOMBO_EMBEDDING_NORMALIZE", self.embedding.normalize)

        # Suggestions
        if (max_results := safe_int("SMARTCOMBO_DEFAULT_MAX_RESULTS")) is not None:
            self.suggestions.default_max_results = max_results

        # API
        if (host := safe_str("SMARTCOMBO_API_HOST")) is not None:
            self.api.host = host
        if (port := safe_int("SMARTCOMBO_API_PORT")) is not None:
            self.api.port = port

        # Logging
        if (level := safe_str("SMARTCOMBO_LOG_LEVEL")) is not None:
            self.logging.level = level
        if (log_format := safe_str("SMARTCOMBO_LOG_FORMAT")) is not None:
            self.logging.format = log_format
        if (filepath := safe_str("SMARTCOMBO_LOG_FILE")) is not None:
            self.logging.file_path = filepath

        return self


def _default_start_dir() -> Path:
    main_module = sys.modules.get("__main__")
    main_file = getattr(main_module, "__file__", None)
    if main_file:
        return Path(main_file).resolve().parent
    return Path.cwd()


def find_config_file(start_dir: Optional[os.PathLike] = None) -> Path:
    """Locate the shared config file.

    The ``SMARTCOMBO_CONFIG_FILE_PATH`` environment variable wins when set.
    Otherwise every directory from ``start_dir`` up to the filesystem root is
    searched for ``RepoSharedConfig.json``.

    Raises:
        ConfigurationError: If no config file can be found.
    """
    env_path = os.getenv(CONFIG_PATH_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if not path.is_file():
            raise ConfigurationError(
                f"Config file from {CONFIG_PATH_ENV_VAR} does not exist: {env_path}"
            )
        return path

    directory = Path(start_dir).resolve() if start_dir is not None else _default_start_dir()
    while True:
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if directory.parent == directory:
            raise ConfigurationError(f"Could not find {CONFIG_FILE_NAME}")
        directory = directory.parent


def get_settings(
    config_path: Optional[str] = None,
    use_env: bool = True,
    require_file: bool = False,
    start_dir: Optional[os.PathLike] = None,
) -> Settings:
    """Build the service settings.

    Priority: env vars > config file > defaults. When ``config_path`` is not
    given the config file is discovered with :func:`find_config_file`; a missing
    file is only fatal when ``require_file`` is set.
    """
    path: Optional[Path] = Path(config_path) if config_path else None
    if path is None:
        try:
            path = find_config_file(start_dir)
        except ConfigurationError:
            if require_file:
                raise
            logger.warning(f"{CONFIG_FILE_NAME} not found, using defaults")

    settings = Settings.load(str(path)) if path is not None else Settings()
    if use_env:
        settings.apply_env()
    return settings


__all__ = [
    "Settings",
    "EmbeddingConfig",
    "InferenceConfig",
    "SuggestionConfig",
    "APIConfig",
    "LoggingConfig",
    "DEFAULT_EXPENSE_CATEGORIES",
    "CONFIG_FILE_NAME",
    "CONFIG_PATH_ENV_VAR",
    "find_config_file",
    "get_settings",
]
