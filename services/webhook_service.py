import asyncio
import logging
from typing import Optional

import aiohttp
import discord

from models.tracked_account import LiveNotification
from utils.embed_builder import EmbedBuilder

logger = logging.getLogger(__name__)


class WebhookNotifier:
    """Posts live notifications to a Discord webhook.

    Delivery is best effort: failures are logged and never retried.
    """

    def __init__(self, webhook_url: Optional[str], session: Optional[aiohttp.ClientSession] = None):
        self.webhook_url = webhook_url
        self.session = session

    async def ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
        return self.session

    async def send_live_notification(self, notification: LiveNotification) -> bool:
        if not self.webhook_url:
            logger.warning(f"WEBHOOK_URL not configured, skipping notification for {notification.display_name}")
            return False

        embed = EmbedBuilder.create_live_notification(notification)
        try:
            session = await self.ensure_session()
            webhook = discord.Webhook.from_url(self.webhook_url, session=session)
            await webhook.send(embed=embed)
        except (ValueError, discord.HTTPException, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error sending webhook for {notification.display_name}: {e}")
            return False

        logger.info(f"Sent live notification for {notification.display_name} ({notification.live_url})")
        return True

    async def close(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
