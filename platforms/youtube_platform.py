import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from models.tracked_account import Platform, ValidationResult, is_youtube_channel_id
from .base_platform import BasePlatform

logger = logging.getLogger(__name__)

YOUTUBE_API_URL = 'https://www.googleapis.com/youtube/v3'


class YouTubeApiError(Exception):
    def __init__(self, status: int, message: str):
        super().__init__(f"YouTube API returned {status}: {message}")
        self.status = status
        self.message = message


class YouTubePlatform(BasePlatform):
    platform = Platform.YOUTUBE

    def __init__(self, api_key: Optional[str], session: Optional[aiohttp.ClientSession] = None,
                 timeout: float = 15):
        super().__init__(session, timeout)
        self.api_key = api_key
        self.channel_id_cache: Dict[str, str] = {}

    async def is_stream_live(self, identity: str) -> bool:
        if not self.api_key:
            logger.warning("YouTube API key not configured")
            return False

        try:
            channel_id = identity
            if not is_youtube_channel_id(identity):
                channel_id = await self.resolve_channel(identity)
                if not channel_id:
                    logger.error(f"Could not resolve YouTube channel: {identity}")
                    return False

            data = await self._api_get('search', {
                'part': 'snippet',
                'channelId': channel_id,
                'eventType': 'live',
                'type': 'video',
            })
            return len(data.get('items', [])) > 0

        except (YouTubeApiError, aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"YouTube API error for {identity}: {e}")
            return False

    async def resolve_channel(self, handle: str) -> Optional[str]:
        """Turn a handle or legacy username into a ``UC...`` channel ID"""
        if handle in self.channel_id_cache:
            return self.channel_id_cache[handle]

        try:
            search = await self._api_get('search', {
                'part': 'snippet',
                'q': handle,
                'type': 'channel',
                'maxResults': 1,
            })
            items = search.get('items', [])
            channel_id = items[0]['snippet']['channelId'] if items else None

            if not channel_id:
                channels = await self._api_get('channels', {
                    'part': 'id',
                    'forUsername': handle,
                })
                items = channels.get('items', [])
                channel_id = items[0]['id'] if items else None

        except (YouTubeApiError, aiohttp.ClientError, asyncio.TimeoutError, ValueError, KeyError) as e:
            logger.error(f"Error resolving YouTube channel {handle}: {e}")
            return None

        if channel_id:
            self.channel_id_cache[handle] = channel_id
        return channel_id

    async def validate_user(self, username: str) -> ValidationResult:
        if not self.api_key:
            return ValidationResult(valid=False, message="YouTube API key not configured")

        if is_youtube_channel_id(username):
            return ValidationResult(valid=True, resolved_id=username)

        channel_id = await self.resolve_channel(username)
        if not channel_id:
            return ValidationResult(
                valid=False,
                message=f"Could not find YouTube channel: {username}. Try using the channel ID instead."
            )
        return ValidationResult(
            valid=True,
            resolved_id=channel_id,
            note=f"Resolved to channel ID: {channel_id}"
        )

    async def _api_get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        session = await self.ensure_session()
        params = {**params, 'key': self.api_key}
        async with session.get(f"{YOUTUBE_API_URL}/{endpoint}", params=params) as response:
            data = await response.json(content_type=None)
            if response.status != 200:
                message = (data or {}).get('error', {}).get('message', 'unknown error')
                raise YouTubeApiError(response.status, message)
            return data or {}
