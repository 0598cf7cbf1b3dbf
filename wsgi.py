import os
import logging
import signal
import sys

from SmartCombo.app import build_app

logger = logging.getLogger("SMARTCOMBO.WSGI")


def graceful_shutdown(signum, frame):
    """Handle graceful shutdown on SIGTERM/SIGINT."""
    logger.info(f"Received signal {signum}, shutting down")
    sys.exit(0)


def create_app():
    """Create Flask app with production configuration."""
    app = build_app()

    signal.signal(signal.SIGTERM, graceful_shutdown)
    signal.signal(signal.SIGINT, graceful_shutdown)

    logger.info("SmartCombo server ready")
    return app


if __name__ == "__main__":
    app = create_app()
    debug = os.getenv("FLASK_ENV") == "development"
    port = int(os.getenv("SMARTCOMBO_API_PORT", 8000))
    workers = int(os.getenv("GUNICORN_WORKERS", "4"))

    if debug:
        logger.info(f"Starting development server on port {port}")
        app.run(host="0.0.0.0", port=port, debug=True, use_reloader=False)
    else:
        logger.info(f"Use gunicorn to start production server: gunicorn wsgi:app -w {workers}")
else:
    # Create app instance for WSGI servers
    app = create_app()
