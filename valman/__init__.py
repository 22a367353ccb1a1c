"""Status dashboard and control panel for a dockerized Valheim server."""

__version__ = "0.3.0"
