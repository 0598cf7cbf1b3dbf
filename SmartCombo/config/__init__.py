"""Settings, validation and logging setup."""
