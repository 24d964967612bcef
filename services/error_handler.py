import discord
from discord import app_commands
import logging
from services.logging_service import LoggingService


class ErrorHandler:
    """Handles command errors and logs them"""

    def __init__(self, logging_service: LoggingService):
        self.logging_service = logging_service
        self.logger = logging.getLogger(__name__)

    async def handle_command_error(self, interaction: discord.Interaction,
                                   error: app_commands.AppCommandError) -> None:
        """Handle command errors and send appropriate responses"""
        command = interaction.command.name if interaction.command else "unknown"
        await self.logging_service.log_error(error, f"Command error in /{command}")

        error_message = self._get_error_message(error)
        try:
            if interaction.response.is_done():
                await interaction.followup.send(error_message, ephemeral=True)
            else:
                await interaction.response.send_message(error_message, ephemeral=True)
        except discord.HTTPException as e:
            self.logger.error(f"Error in error handler: {e}")

    def _get_error_message(self, error: app_commands.AppCommandError) -> str:
        """Get user-friendly error message"""
        if isinstance(error, app_commands.MissingPermissions):
            return "❌ You don't have permission to use this command."

        elif isinstance(error, app_commands.BotMissingPermissions):
            return "❌ I don't have the required permissions to execute this command."

        elif isinstance(error, app_commands.CommandOnCooldown):
            return f"❌ Please wait {error.retry_after:.1f}s before using this command again."

        elif isinstance(error, app_commands.TransformerError):
            return f"❌ Invalid input format: {error}"

        elif isinstance(error, app_commands.CommandInvokeError) and isinstance(error.original, ValueError):
            return f"❌ Invalid input: {error.original}"

        else:
            self.logger.error(f"Unexpected error: {type(error).__name__}: {error}")
            return "An error occurred while processing your command."
