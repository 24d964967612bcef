import logging
import traceback
import discord
from typing import Optional, Union
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

LEVEL_COLORS = {
    'INFO': discord.Color.blue(),
    'WARNING': discord.Color.yellow(),
    'ERROR': discord.Color.red(),
}


def setup_logging(log_level: str = 'INFO', log_file: Optional[str] = 'bot.log') -> None:
    """Configure root logging to the console and, optionally, a file"""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=handlers
    )
    # discord.py logs every gateway event at DEBUG
    logging.getLogger('discord').setLevel(max(logging.INFO, logging.root.level))


class LoggingService:
    """Service for handling logging and error reporting

    Messages always go to the standard logger. Once the bot is connected and
    ``LOG_CHANNEL_ID`` is set, info and above are mirrored to that channel as
    embeds; debug output stays local.
    """

    def __init__(self, log_channel_id: Optional[int] = None,
                 logger_name: str = 'streamradar'):
        self.bot = None
        self.log_channel_id = log_channel_id
        self.logger = logging.getLogger(logger_name)

    def set_bot(self, bot: discord.Client) -> None:
        """Set bot instance for Discord channel logging"""
        self.bot = bot

    async def log_debug(self, message: str) -> None:
        self.logger.debug(message)

    async def log_info(self, message: str) -> None:
        self.logger.info(message)
        await self._log_to_discord("INFO", message)

    async def log_warning(self, message: str) -> None:
        self.logger.warning(message)
        await self._log_to_discord("WARNING", message)

    async def log_error(self, error: Union[Exception, str], context: str = "") -> None:
        """Log error message with optional context"""
        error_message = f"{context}: {error}" if context else str(error)
        if isinstance(error, Exception):
            self.logger.error(error_message, exc_info=error)
            await self._log_to_discord("ERROR", error_message, error)
        else:
            self.logger.error(error_message)
            await self._log_to_discord("ERROR", error_message)

    async def _log_to_discord(self, level: str, message: str, error: Optional[Exception] = None) -> None:
        if not self.bot or not self.log_channel_id:
            return

        embed = discord.Embed(
            title=f"Stream Monitor - {level}",
            description=message[:4000],
            color=LEVEL_COLORS.get(level, discord.Color.default()),
            timestamp=datetime.now(timezone.utc)
        )
        if error is not None:
            tb = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
            if len(tb) > 1000:
                tb = "..." + tb[-997:]
            embed.add_field(name="Traceback", value=f"```python\n{tb}```", inline=False)

        # mirroring is best effort; a failed send must never reach the caller
        try:
            channel = self.bot.get_channel(self.log_channel_id)
            if channel:
                await channel.send(embed=embed)
        except Exception as e:
            self.logger.error(f"Failed to log to Discord: {e}")
