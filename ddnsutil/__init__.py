"""Helpers for dynamic DNS clients: API request signing, IP caching, networking and self-update."""

__version__ = "0.1.0"