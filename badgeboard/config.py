"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Single .env at the project root
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)

PLATFORM_WHOP = "whop"
PLATFORM_LOCAL = "local"

DEFAULT_WHOP_API_BASE = "https://api.whop.com/api/v1"


def _csv_env(key: str, default: str = "") -> List[str]:
    raw = os.getenv(key, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Platform: "whop" (HTTP API) or "local" (header identity, in-memory directory)
    platform: str = PLATFORM_LOCAL

    # Whop credentials
    whop_api_key: Optional[str] = None
    whop_app_id: Optional[str] = None
    whop_api_base: str = DEFAULT_WHOP_API_BASE
    whop_token_public_key: Optional[str] = None
    whop_token_algorithm: str = "ES256"
    request_timeout: float = 10.0

    # Leaderboard member discovery
    max_member_pages: int = 20

    # Local platform: user ids treated as company admins
    local_admin_user_ids: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        whop_api_key = os.getenv("WHOP_API_KEY") or None
        platform = os.getenv("PLATFORM", "").strip().lower()
        if platform not in (PLATFORM_WHOP, PLATFORM_LOCAL):
            platform = PLATFORM_WHOP if whop_api_key else PLATFORM_LOCAL

        public_key = os.getenv("WHOP_TOKEN_PUBLIC_KEY") or None
        if public_key:
            # Keys pasted into .env usually carry literal "\n" sequences
            public_key = public_key.replace("\\n", "\n")

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=_csv_env("CORS_ORIGINS", "*"),
            platform=platform,
            whop_api_key=whop_api_key,
            whop_app_id=os.getenv("WHOP_APP_ID") or os.getenv("NEXT_PUBLIC_WHOP_APP_ID") or None,
            whop_api_base=os.getenv("WHOP_API_BASE", DEFAULT_WHOP_API_BASE).rstrip("/"),
            whop_token_public_key=public_key,
            whop_token_algorithm=os.getenv("WHOP_TOKEN_ALGORITHM", "ES256"),
            request_timeout=float(os.getenv("WHOP_REQUEST_TIMEOUT", "10")),
            max_member_pages=int(os.getenv("LEADERBOARD_MAX_MEMBER_PAGES", "20")),
            local_admin_user_ids=_csv_env("LOCAL_ADMIN_USER_IDS"),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.platform == PLATFORM_WHOP:
            if not self.whop_api_key:
                errors.append("WHOP_API_KEY is not set")
            if not self.whop_app_id:
                errors.append("WHOP_APP_ID is not set")
            if not self.whop_token_public_key:
                errors.append("WHOP_TOKEN_PUBLIC_KEY is not set")

        if self.max_member_pages < 1:
            errors.append(f"LEADERBOARD_MAX_MEMBER_PAGES must be at least 1, got {self.max_member_pages}")

        return len(errors) == 0, errors


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
