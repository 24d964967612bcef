import aiohttp
from .base_platform import BasePlatform
import asyncio
import logging
import re
from typing import Optional, Tuple

from models.tracked_account import Platform
from utils.live_indicators import TIKTOK_INDICATORS, matched_indicators, parse_markup
from utils.user_agents import CHROME_WINDOWS, document_headers

logger = logging.getLogger(__name__)


class TikTokPlatform(BasePlatform):
    """TikTok has no public live API, so the live page itself is scraped"""

    platform = Platform.TIKTOK
    max_redirects = 5

    def __init__(self, session: Optional[aiohttp.ClientSession] = None, timeout: float = 15,
                 user_agent: str = CHROME_WINDOWS):
        super().__init__(session, timeout)
        self.headers = document_headers(user_agent)

    async def is_stream_live(self, identity: str) -> bool:
        username = self._extract_username(identity)
        if not username:
            logger.warning(f"Could not extract TikTok username from: {identity}")
            return False

        try:
            status, final_url, html = await self._fetch_live_page(username)
        except aiohttp.ClientResponseError as e:
            if e.status == 404:
                logger.error(f"TikTok user {username} not found (404)")
            elif e.status == 403:
                logger.error(f"TikTok blocked request for {username} (403) - might need to use proxy")
            else:
                logger.error(f"TikTok error for {username}: HTTP {e.status}")
            return False
        except asyncio.TimeoutError:
            logger.error(f"TikTok request timeout for {username}")
            return False
        except aiohttp.ClientError as e:
            logger.error(f"TikTok request error for {username}: {e}")
            return False

        if status != 200:
            logger.error(f"TikTok returned HTTP {status} for {username}, treating as not live")
            return False

        # TikTok answers "not live" by redirecting the live page to the profile
        if '/live' not in final_url:
            logger.info(f"TikTok live page for {username} redirected to {final_url}: NOT LIVE")
            return False

        matched = matched_indicators(parse_markup(html), TIKTOK_INDICATORS)
        is_live = bool(matched)
        logger.info(
            f"TikTok live check for {username}: {'LIVE' if is_live else 'NOT LIVE'}"
            + (f" (matched: {', '.join(matched)})" if matched else "")
        )
        return is_live

    async def _fetch_live_page(self, username: str) -> Tuple[int, str, str]:
        """Return the status, the URL the live page resolved to and its markup"""
        session = await self.ensure_session()
        url = self._get_live_url(username)
        logger.debug(f"Fetching TikTok live page: {url}")

        async with session.get(url, headers=self.headers, max_redirects=self.max_redirects) as response:
            response.raise_for_status()
            return response.status, str(response.url), await response.text()

    def _get_live_url(self, username: str) -> str:
        return f"https://www.tiktok.com/@{username}/live"

    def _extract_username(self, identity: str) -> Optional[str]:
        """Extract username from a TikTok URL, ``@handle`` or bare name"""
        patterns = [
            r'(?:https?://)?(?:www\.)?tiktok\.com/@([a-zA-Z0-9_.]+)(?:/live)?/?',
            r'@?([a-zA-Z0-9_.]+)$'
        ]

        for pattern in patterns:
            match = re.match(pattern, identity.strip())
            if match:
                return match.group(1)
        return None
