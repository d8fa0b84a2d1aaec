"""Application state: the badge service and the platform adapter."""

import logging
from typing import Optional

from .config import PLATFORM_WHOP, ServerConfig, get_config
from .services import BadgeService, LocalPlatform, Platform, WhopPlatform

logger = logging.getLogger(__name__)


class AppState:
    """Process-wide state, built once at startup and injected into routes."""

    def __init__(
        self,
        config: ServerConfig,
        service: Optional[BadgeService] = None,
        platform: Optional[Platform] = None,
    ):
        self.config = config
        self.badge_service = service or BadgeService()
        self.platform = platform or self._create_platform(config)
        logger.info(f"[startup] Platform: {type(self.platform).__name__}")

    def _create_platform(self, config: ServerConfig) -> Platform:
        """Create the platform adapter (Whop when configured, else local)."""
        if config.platform == PLATFORM_WHOP:
            _, errors = config.validate()
            for error in errors:
                logger.warning(f"[startup] {error}")
            if config.whop_api_key:
                return WhopPlatform(
                    api_key=config.whop_api_key,
                    app_id=config.whop_app_id or "",
                    token_public_key=config.whop_token_public_key or "",
                    token_algorithm=config.whop_token_algorithm,
                    api_base=config.whop_api_base,
                    timeout=config.request_timeout,
                    max_member_pages=config.max_member_pages,
                )
            logger.warning("[startup] Whop platform requested without WHOP_API_KEY, using local platform")
        return LocalPlatform(admin_user_ids=config.local_admin_user_ids)

    @property
    def platform_name(self) -> str:
        return "whop" if isinstance(self.platform, WhopPlatform) else "local"


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState(get_config())
    return _state


def reset_state() -> None:
    """Drop the process-wide state; the next get_state() builds a fresh one."""
    global _state
    _state = None
