from .base_platform import BasePlatform
import re
import asyncio
import logging
from typing import Optional, Sequence

import aiohttp

from models.tracked_account import Platform
from services.rate_limiter import RateLimiter
from utils.live_indicators import KICK_INDICATORS, matched_indicators, parse_markup
from utils.user_agents import (CHROME_MAC, CHROME_WINDOWS, USER_AGENTS, document_headers,
                               random_user_agent, xhr_headers)

logger = logging.getLogger(__name__)

KICK_URL = 'https://kick.com'


class KickPlatform(BasePlatform):
    """Kick channel API with a scraping fallback for when Cloudflare says 403"""

    platform = Platform.KICK
    max_redirects = 5

    def __init__(self, rate_limiter: Optional[RateLimiter] = None,
                 session: Optional[aiohttp.ClientSession] = None, timeout: float = 15,
                 api_user_agents: Sequence[str] = USER_AGENTS,
                 page_user_agents: Sequence[str] = (CHROME_WINDOWS, CHROME_MAC)):
        super().__init__(session, timeout)
        self.rate_limiter = rate_limiter or RateLimiter()
        self.api_user_agents = api_user_agents
        self.page_user_agents = page_user_agents

    async def is_stream_live(self, identity: str) -> bool:
        """Main method to check if stream is live"""
        username = self._extract_username(identity)
        if not username:
            logger.warning(f"Missing Kick username. Input: {identity}")
            return False

        try:
            is_live = await self._try_api(username)
            if is_live is not None:
                return is_live

            logger.info(f"Kick API failed for {username}, trying web scraping...")
            return await self._try_web_scraping(username)

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"All Kick methods failed for {username}: {e}")
            return False

    async def _try_api(self, username: str) -> Optional[bool]:
        """Ask the channel API; ``None`` means access was denied and the answer is unknown"""
        await self.rate_limiter.wait()
        session = await self.ensure_session()
        headers = xhr_headers(
            random_user_agent(self.api_user_agents),
            referer=f"{KICK_URL}/{username}",
            origin=KICK_URL
        )

        async with session.get(f"{KICK_URL}/api/v1/channels/{username}", headers=headers) as response:
            if response.status == 403:
                logger.info(f"Kick API returned 403 for {username}, trying alternative approach...")
                return None

            response.raise_for_status()
            data = await response.json(content_type=None)

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected Kick API payload for {username}: {type(data).__name__}")
        return data.get('livestream') is not None

    async def _try_web_scraping(self, username: str) -> bool:
        try:
            await self.rate_limiter.wait()
            session = await self.ensure_session()
            headers = document_headers(random_user_agent(self.page_user_agents), client_hints=True)

            async with session.get(f"{KICK_URL}/{username}", headers=headers,
                                   max_redirects=self.max_redirects) as response:
                response.raise_for_status()
                if response.status != 200:
                    logger.error(f"Kick web scraping for {username} returned HTTP {response.status}")
                    return False
                html = await response.text()

        except aiohttp.ClientResponseError as e:
            logger.error(f"Kick web scraping failed for {username}: HTTP {e.status}")
            return False
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Kick web scraping failed for {username}: {e!r}")
            return False

        matched = matched_indicators(parse_markup(html), KICK_INDICATORS)
        is_live = bool(matched)
        logger.info(
            f"Kick web scraping for {username}: {'LIVE' if is_live else 'NOT LIVE'}"
            + (f" (matched: {', '.join(matched)})" if matched else "")
        )
        return is_live

    def _extract_username(self, identity: str) -> Optional[str]:
        """Extract username from a Kick.com profile URL or bare name"""
        match = re.search(r"kick\.com/([a-zA-Z0-9_-]+)", identity)
        if match:
            return match.group(1)

        identity = identity.strip()
        if re.fullmatch(r"[a-zA-Z0-9_-]+", identity):
            return identity
        return None
