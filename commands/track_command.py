from discord import app_commands, Interaction
from typing import Literal, Optional
import logging

logger = logging.getLogger(__name__)

PlatformChoice = Literal['youtube', 'twitch', 'tiktok', 'kick']


def setup_track_command(bot):
    @bot.tree.command(
        name="track",
        description="Add a user to the monitoring list"
    )
    @app_commands.describe(
        platform="Platform to monitor",
        username="Username to monitor",
        display_name="Display name for notifications"
    )
    async def track(
        interaction: Interaction,
        platform: PlatformChoice,
        username: str,
        display_name: Optional[str] = None
    ):
        await interaction.response.defer(ephemeral=True)

        added, message = await bot.tracking_service.add_account(platform, username, display_name)
        prefix = "✅" if added else "❌"
        await interaction.followup.send(f"{prefix} {message}", ephemeral=True)
