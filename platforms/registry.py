from typing import Dict

from models.tracked_account import Platform
from services.config_manager import ConfigManager
from services.rate_limiter import RateLimiter
from .base_platform import BasePlatform
from .kick_platform import KickPlatform
from .tiktok_platform import TikTokPlatform
from .twitch_platform import TwitchPlatform
from .youtube_platform import YouTubePlatform


def create_platforms(config: ConfigManager) -> Dict[Platform, BasePlatform]:
    """Build one checker per supported platform from the configuration"""
    timeout = config.request_timeout
    return {
        Platform.YOUTUBE: YouTubePlatform(config.youtube_api_key, timeout=timeout),
        Platform.TWITCH: TwitchPlatform(
            config.twitch_client_id,
            config.twitch_client_secret,
            timeout=timeout
        ),
        Platform.TIKTOK: TikTokPlatform(timeout=timeout),
        Platform.KICK: KickPlatform(
            rate_limiter=RateLimiter(config.kick_request_delay),
            timeout=timeout
        ),
    }
