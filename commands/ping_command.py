from datetime import datetime, timezone

from discord import Interaction

from utils.embed_builder import EmbedBuilder


def setup_ping_command(bot):
    @bot.tree.command(
        name="ping",
        description="Test if the bot is responding"
    )
    async def ping(interaction: Interaction):
        latency = datetime.now(timezone.utc) - interaction.created_at
        entries = await bot.tracking_service.list_accounts()
        embed = EmbedBuilder.create_ping_embed(
            int(latency.total_seconds() * 1000),
            len(entries),
            bot.notification_service.service_status.value
        )
        await interaction.response.send_message(embed=embed, ephemeral=True)
