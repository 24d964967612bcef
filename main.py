import asyncio
import logging
import sys

import discord
from discord import app_commands

from commands import CommandManager
from platforms.registry import create_platforms
from services.config_manager import ConfigManager, ConfigurationError
from services.database_service import DatabaseService
from services.error_handler import ErrorHandler
from services.live_status_tracker import LiveStatusTracker
from services.logging_service import LoggingService, setup_logging
from services.notification_service import NotificationService
from services.stream_service import TrackingService
from services.tracking_store import TrackingStore
from services.webhook_service import WebhookNotifier

logger = logging.getLogger(__name__)


class StreamMonitorBot(discord.Client):
    def __init__(self, config: ConfigManager):
        super().__init__(
            intents=discord.Intents.default(),
            application_id=int(config.get("DISCORD_CLIENT_ID")) if config.get("DISCORD_CLIENT_ID") else None
        )
        self.tree = app_commands.CommandTree(self)
        self.config = config
        self._commands_setup = False
        self._monitoring_started = False

        logger.info("Initializing services...")
        self.logging_service = LoggingService(config.log_channel_id)
        self.error_handler = ErrorHandler(self.logging_service)
        self.db_service = DatabaseService(config.database_path)
        self.repository = TrackingStore(self.db_service)
        self.tracker = LiveStatusTracker()
        self.platforms = create_platforms(config)
        self.notifier = WebhookNotifier(config.webhook_url)
        self.tracking_service = TrackingService(
            self.repository,
            self.tracker,
            self.platforms,
            self.logging_service
        )
        self.notification_service = NotificationService(
            self.repository,
            self.tracker,
            self.platforms,
            self.notifier,
            self.logging_service,
            check_interval=config.check_interval
        )
        logger.info("Services initialized successfully")

    async def setup_hook(self):
        """Setup bot hooks and initialize services"""
        logger.info("Initializing database...")
        await self.repository.initialize()
        imported = await self.db_service.import_legacy_json(self.config.get('LEGACY_DATA_FILE'))
        accounts = await self.repository.get_all()
        logger.info(f"Loaded {len(accounts)} monitored users ({imported} imported from legacy file)")

        self.setup_commands()

        logger.info("Syncing command tree...")
        synced = await self.tree.sync()
        logger.info(f"Successfully registered {len(synced)} slash commands")
        for command in synced:
            logger.info(f"  - /{command.name}: {command.description}")

    def setup_commands(self):
        """Setup bot commands"""
        if self._commands_setup:
            return

        CommandManager(self).setup()
        self.tree.error(self.error_handler.handle_command_error)
        self._commands_setup = True
        logger.info("Commands setup completed")

    async def on_ready(self):
        """Called when the bot is ready"""
        if self._monitoring_started:
            return

        logger.info(f'Bot is ready! Logged in as {self.user} (ID: {self.user.id})')
        self.logging_service.set_bot(self)
        await self.notification_service.start_checking()
        self._monitoring_started = True

    async def close(self):
        """Cleanup before shutdown"""
        logger.info("Shutting down bot...")
        try:
            await self.notification_service.stop_checking()
            await self.notification_service.wait_until_idle()

            for platform in self.platforms.values():
                await platform.close()
            await self.notifier.close()
            logger.info("Cleanup completed")
        finally:
            await super().close()


async def run_bot_async(config: ConfigManager):
    """Run the bot asynchronously"""
    bot = StreamMonitorBot(config)
    async with bot:
        logger.info("Starting bot client...")
        await bot.start(config.discord_token)


def run_bot():
    """Run the bot"""
    config = ConfigManager()
    setup_logging(config.log_level, config.get('LOG_FILE'))

    try:
        config.validate()
    except ConfigurationError as e:
        logger.error(str(e))
        logger.error("Please check your .env file and ensure these variables are set")
        sys.exit(1)

    try:
        asyncio.run(run_bot_async(config))
    except KeyboardInterrupt:
        logger.info("Bot shutdown requested by user")
    except discord.LoginFailure as e:
        logger.error(f"Invalid bot token: {e}")
        sys.exit(1)
    finally:
        logger.info("Bot shutdown complete")


if __name__ == "__main__":
    run_bot()
