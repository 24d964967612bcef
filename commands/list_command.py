from discord import Interaction

from utils.embed_builder import EmbedBuilder


def setup_list_command(bot):
    @bot.tree.command(
        name="list",
        description="List all monitored users"
    )
    async def list_users(interaction: Interaction):
        entries = await bot.tracking_service.list_accounts()
        if not entries:
            await interaction.response.send_message(
                "No users are currently being monitored.",
                ephemeral=True
            )
            return

        embed = EmbedBuilder.create_tracked_list_embed(entries)
        await interaction.response.send_message(embed=embed, ephemeral=True)
