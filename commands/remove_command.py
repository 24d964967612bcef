from discord import app_commands, Interaction

from .track_command import PlatformChoice


def setup_remove_command(bot):
    @bot.tree.command(
        name="remove",
        description="Remove a user from the monitoring list"
    )
    @app_commands.describe(
        platform="Platform",
        username="Username to remove"
    )
    async def remove(
        interaction: Interaction,
        platform: PlatformChoice,
        username: str
    ):
        await interaction.response.defer(ephemeral=True)

        if await bot.tracking_service.remove_account(platform, username):
            await interaction.followup.send(
                f"Removed {username} from {platform} monitoring.",
                ephemeral=True
            )
        else:
            await interaction.followup.send(
                f"{username} on {platform} is not being monitored.",
                ephemeral=True
            )
