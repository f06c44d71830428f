"""
Router package for the Levels Server.

Routers:
- levels.py: Swing zone, swing ray and indicator level endpoints
"""

from .levels import router as levels_router

__all__ = [
    "levels_router",
]
