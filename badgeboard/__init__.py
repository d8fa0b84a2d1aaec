"""
Badgeboard: company badges, assignments and leaderboards.

Usage: uvicorn badgeboard:app --reload --port 8000
"""

from .app import app, create_app
from .config import ServerConfig, get_config, reload_config
from .services import BadgeService, LocalPlatform, WhopPlatform
from .state import AppState, get_state, reset_state

__all__ = [
    "app",
    "create_app",
    "ServerConfig",
    "get_config",
    "reload_config",
    "BadgeService",
    "LocalPlatform",
    "WhopPlatform",
    "AppState",
    "get_state",
    "reset_state",
]
