import discord
from collections import defaultdict
from datetime import datetime, timezone
from typing import List, Tuple

from models.tracked_account import LiveNotification, TrackedAccount

LIVE_COLOR = 0xFF0000
LIST_COLOR = 0x00AE86
PING_COLOR = 0x00FF00


class EmbedBuilder:
    """Utility class for building Discord embeds"""

    @staticmethod
    def create_live_notification(notification: LiveNotification) -> discord.Embed:
        platform = notification.platform.label
        embed = discord.Embed(
            title=f"🔴 {notification.display_name} is now LIVE!",
            description=f"{notification.display_name} just went live on {platform}",
            color=LIVE_COLOR,
            url=notification.live_url,
            timestamp=datetime.now(timezone.utc)
        )
        embed.add_field(name="Platform", value=platform, inline=True)
        return embed

    @staticmethod
    def create_tracked_list_embed(entries: List[Tuple[TrackedAccount, bool]]) -> discord.Embed:
        """List tracked accounts grouped by platform with their live status"""
        embed = discord.Embed(
            title="📺 Monitored Users",
            color=LIST_COLOR,
            timestamp=datetime.now(timezone.utc)
        )

        by_platform = defaultdict(list)
        for account, is_live in entries:
            status = "🔴 LIVE" if is_live else "⚫ Offline"
            by_platform[account.platform.label].append(
                f"{status} {account.display_name} ({account.username})"
            )

        for platform, lines in by_platform.items():
            embed.add_field(name=platform, value="\n".join(lines)[:1024] or "None", inline=True)

        return embed

    @staticmethod
    def create_ping_embed(latency_ms: int, monitored: int, monitoring_status: str) -> discord.Embed:
        embed = discord.Embed(
            title="🏓 Pong!",
            description="Bot is online and responding to commands",
            color=PING_COLOR,
            timestamp=datetime.now(timezone.utc)
        )
        embed.add_field(name="Latency", value=f"{latency_ms}ms", inline=True)
        embed.add_field(name="Monitored Users", value=str(monitored), inline=True)
        embed.add_field(name="Monitoring", value=monitoring_status, inline=True)
        return embed
