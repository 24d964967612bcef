from .track_command import setup_track_command
from .remove_command import setup_remove_command
from .list_command import setup_list_command
from .ping_command import setup_ping_command

class CommandManager:
    def __init__(self, bot):
        self.bot = bot
        self.setup_functions = [
            setup_track_command,
            setup_remove_command,
            setup_list_command,
            setup_ping_command
        ]

    def setup(self):
        """Setup all commands"""
        for setup_function in self.setup_functions:
            setup_function(self.bot)
