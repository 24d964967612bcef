from typing import Dict, Any, List, Optional
import json
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when required settings are missing"""


class ConfigManager:
    """Manages application configuration

    Values come from an optional JSON file; environment variables (and a
    ``.env`` file, loaded on construction) take precedence over it.
    """

    REQUIRED_KEYS = ('DISCORD_TOKEN', 'DISCORD_CLIENT_ID')
    OPTIONAL_KEYS = ('WEBHOOK_URL', 'YOUTUBE_API_KEY', 'TWITCH_CLIENT_ID', 'TWITCH_CLIENT_SECRET')

    DEFAULTS = {
        'CHECK_INTERVAL': 300,
        'KICK_REQUEST_DELAY': 3.0,
        'REQUEST_TIMEOUT': 15,
        'DATABASE_PATH': 'bot_data.db',
        'LEGACY_DATA_FILE': 'monitored_users.json',
        'LOG_LEVEL': 'INFO',
        'LOG_FILE': 'bot.log',
    }

    def __init__(self, config_path: str = "config.json",
                 environ: Optional[Dict[str, str]] = None,
                 load_env_file: bool = True):
        if load_env_file:
            load_dotenv()
        self.config_path = Path(config_path)
        self._environ = os.environ if environ is None else environ
        self._config: Dict[str, Any] = {}
        self._load_config()

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        value = self._environ.get(key)
        if value not in (None, ''):
            return value
        value = self._config.get(key)
        if value not in (None, ''):
            return value
        return self.DEFAULTS.get(key, default)

    def get_platform_credentials(self, platform: str) -> Dict[str, str]:
        """Get platform-specific credentials"""
        platform_config = self._config.get('platforms', {}).get(platform, {})

        env_prefix = platform.upper()
        env_credentials = {
            key.replace(f"{env_prefix}_", '').lower(): value
            for key, value in self._environ.items()
            if key.startswith(f"{env_prefix}_") and value
        }

        return {**platform_config, **env_credentials}

    def missing_required(self) -> List[str]:
        return [key for key in self.REQUIRED_KEYS if not self.get(key)]

    def validate(self) -> None:
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")
        logger.info("Required Discord configuration found")

    @property
    def discord_token(self) -> Optional[str]:
        return self.get('DISCORD_TOKEN')

    @property
    def webhook_url(self) -> Optional[str]:
        return self.get('WEBHOOK_URL')

    @property
    def youtube_api_key(self) -> Optional[str]:
        return self.get_platform_credentials('youtube').get('api_key')

    @property
    def twitch_client_id(self) -> Optional[str]:
        return self.get_platform_credentials('twitch').get('client_id')

    @property
    def twitch_client_secret(self) -> Optional[str]:
        return self.get_platform_credentials('twitch').get('client_secret')

    @property
    def check_interval(self) -> float:
        return float(self.get('CHECK_INTERVAL'))

    @property
    def kick_request_delay(self) -> float:
        return float(self.get('KICK_REQUEST_DELAY'))

    @property
    def request_timeout(self) -> float:
        return float(self.get('REQUEST_TIMEOUT'))

    @property
    def database_path(self) -> str:
        return self.get('DATABASE_PATH')

    @property
    def log_level(self) -> str:
        return self.get('LOG_LEVEL')

    @property
    def log_channel_id(self) -> Optional[int]:
        value = self.get('LOG_CHANNEL_ID')
        return int(value) if value else None

    def _load_config(self) -> None:
        """Load configuration from file"""
        if not self.config_path.exists():
            return
        try:
            with open(self.config_path, 'r') as f:
                self._config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading config: {e}")
            self._config = {}
