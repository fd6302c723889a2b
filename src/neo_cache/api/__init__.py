"""HTTP surface of the cache engine."""

from .app import create_app

__all__ = ["create_app"]
