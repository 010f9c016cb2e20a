"""Idleguard - inactivity session timeout with a warning countdown."""

__version__ = "0.1.0"
