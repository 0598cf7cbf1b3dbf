"""Application startup: settings, logging, category index, Flask app."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .api.server import SmartComboAPIServer
from .config.logging_config import setup_logging
from .config.settings import get_settings
from .config.validator import ConfigValidator
from .core.categories import CategoryIndex
from .core.embedding import EmbeddingModule

logger = logging.getLogger("SMARTCOMBO.App")


def build_server(config_path: Optional[str] = None) -> SmartComboAPIServer:
    """Load settings and embed every category before any request is served."""
    load_dotenv()

    settings = get_settings(config_path=config_path or os.getenv("SMARTCOMBO_CONFIG"))
    setup_logging(settings.logging.level, settings.logging.format, settings.logging.file_path)
    if settings.source_path:
        logger.info(f"Using configuration from {settings.source_path}")

    validation = ConfigValidator().validate(settings)

    logger.info(f"Loading embedding model {settings.embedding.model_name}...")
    embedder = EmbeddingModule(settings.embedding)
    index = CategoryIndex.build(embedder, settings.suggestions.categories)

    return SmartComboAPIServer(index, settings=settings, validation=validation)


def build_app(config_path: Optional[str] = None) -> Flask:
    """Factory for WSGI servers."""
    return build_server(config_path).create_flask_app()


def run_server() -> None:
    """Run the development server."""
    server = build_server()
    server.run(debug=os.getenv("FLASK_ENV") == "development")


__all__ = ["build_server", "build_app", "run_server"]
