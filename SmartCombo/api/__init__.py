"""SmartCombo HTTP API module."""

from .server import SmartComboAPIServer, SmartComboAPIClient, APIResponse, create_app

__all__ = ["SmartComboAPIServer", "SmartComboAPIClient", "APIResponse", "create_app"]
