"""Async client and presentation logic for the wallet REST API."""

__version__ = "0.1.0"
