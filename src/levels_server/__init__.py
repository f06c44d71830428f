"""
Levels Server

Thin HTTP surface over the swing zone engine for the application shell.
"""

from .api import app, create_app

__all__ = ["app", "create_app"]
