"""Relay for two-player rooms over WebSocket."""

__version__ = "0.1.0"
