import aiohttp
import asyncio
import logging
from typing import Any, Dict, Optional

from models.tracked_account import Platform, ValidationResult
from services.credential_cache import TokenAcquisitionError, TwitchTokenCache
from .base_platform import BasePlatform

logger = logging.getLogger(__name__)

HELIX_URL = 'https://api.twitch.tv/helix'


class TwitchAuthRejected(Exception):
    """Helix answered 401 for the cached token"""

    def __init__(self):
        super().__init__("Twitch rejected the access token (401)")


class TwitchPlatform(BasePlatform):
    platform = Platform.TWITCH

    def __init__(self, client_id: Optional[str], client_secret: Optional[str],
                 session: Optional[aiohttp.ClientSession] = None, timeout: float = 15,
                 token_cache: Optional[TwitchTokenCache] = None):
        super().__init__(session, timeout)
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_cache = token_cache or TwitchTokenCache(client_id, client_secret)

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    async def is_stream_live(self, identity: str) -> bool:
        if not self.has_credentials:
            logger.warning("Twitch API credentials not configured")
            return False

        try:
            data = await self._helix_get('streams', {'user_login': identity})
        except TokenAcquisitionError as e:
            logger.error(str(e))
            return False
        except (TwitchAuthRejected, aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Twitch API error for {identity}: {e}")
            return False

        is_live = len(data.get('data', [])) > 0
        logger.debug(f"Twitch stream {'active' if is_live else 'not active'} for {identity}")
        return is_live

    async def validate_user(self, username: str) -> ValidationResult:
        if not self.has_credentials:
            return ValidationResult(valid=False, message="Twitch API credentials not configured")

        try:
            data = await self._helix_get('users', {'login': username})
        except (TokenAcquisitionError, TwitchAuthRejected, aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            return ValidationResult(valid=False, message=f"Error validating Twitch user: {e}")

        if not data.get('data'):
            return ValidationResult(valid=False, message=f'Twitch user "{username}" not found')
        return ValidationResult(valid=True)

    async def _helix_get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET a Helix endpoint, renewing the token once if it was rejected"""
        try:
            return await self._request(endpoint, params)
        except TwitchAuthRejected:
            self.token_cache.invalidate()

        try:
            return await self._request(endpoint, params)
        except TwitchAuthRejected:
            self.token_cache.invalidate()
            raise

    async def _request(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        session = await self.ensure_session()
        token = await self.token_cache.ensure_token(session)
        headers = {
            'Client-ID': self.client_id,
            'Authorization': f'Bearer {token}',
            'Accept': 'application/json'
        }

        async with session.get(f"{HELIX_URL}/{endpoint}", params=params, headers=headers) as response:
            if response.status == 401:
                raise TwitchAuthRejected()
            response.raise_for_status()
            return await response.json()
