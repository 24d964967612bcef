import re
from typing import Tuple

from models.tracked_account import Platform


class UsernameValidator:
    @staticmethod
    def normalize(platform: str, username: str) -> str:
        """Strip whitespace and the leading @ users tend to paste"""
        username = username.strip()
        if Platform(platform) in (Platform.TIKTOK, Platform.YOUTUBE):
            username = username.lstrip('@')
        return username

    @staticmethod
    def validate_youtube_username(username: str) -> Tuple[bool, str]:
        """
        Accept either a channel ID (UC followed by 22 characters) or a handle:
        - Length between 3 and 30 characters
        - Only letters, numbers, underscores, hyphens and periods
        """
        if re.match(r'^UC[a-zA-Z0-9_-]{22}$', username):
            return True, "Valid channel ID"

        if not 3 <= len(username) <= 30:
            return False, "YouTube handle must be between 3 and 30 characters long"

        if not re.match(r'^[a-zA-Z0-9_.-]*$', username):
            return False, "YouTube handle can only contain letters, numbers, underscores, hyphens, and periods"

        return True, "Valid username"

    @staticmethod
    def validate_twitch_username(username: str) -> Tuple[bool, str]:
        """
        Validate Twitch username according to Twitch rules:
        - Length between 4 and 25 characters
        - Only letters, numbers, and underscores
        - Must begin with a letter or number
        """
        if not 4 <= len(username) <= 25:
            return False, "Twitch username must be between 4 and 25 characters long"

        if not re.match(r'^[a-zA-Z0-9][a-zA-Z0-9_]*$', username):
            return False, "Twitch username can only contain letters, numbers, and underscores"

        return True, "Valid username"

    @staticmethod
    def validate_tiktok_username(username: str) -> Tuple[bool, str]:
        """
        Validate TikTok username according to TikTok rules:
        - Length between 2 and 24 characters
        - Only letters, numbers, underscores, and periods
        - Cannot end with a period
        """
        if not 2 <= len(username) <= 24:
            return False, "TikTok username must be between 2 and 24 characters long"

        if username.endswith('.'):
            return False, "TikTok username cannot end with a period"

        if not re.match(r'^[a-zA-Z0-9_.]*$', username):
            return False, "TikTok username can only contain letters, numbers, underscores, and periods"

        return True, "Valid username"

    @staticmethod
    def validate_kick_username(username: str) -> Tuple[bool, str]:
        """
        Validate Kick username:
        - Length between 3 and 25 characters
        - Only letters, numbers, underscores, and hyphens
        """
        if not 3 <= len(username) <= 25:
            return False, "Kick username must be between 3 and 25 characters long"

        if not re.match(r'^[a-zA-Z0-9_-]*$', username):
            return False, "Kick username can only contain letters, numbers, underscores, and hyphens"

        return True, "Valid username"

    @staticmethod
    def validate_username(platform: str, username: str) -> Tuple[bool, str]:
        """Validate username based on platform"""
        try:
            platform = Platform(platform.lower())
        except ValueError:
            return False, f"Unsupported platform: {platform}"

        if platform is Platform.YOUTUBE:
            return UsernameValidator.validate_youtube_username(username)
        elif platform is Platform.TWITCH:
            return UsernameValidator.validate_twitch_username(username)
        elif platform is Platform.TIKTOK:
            return UsernameValidator.validate_tiktok_username(username)
        else:
            return UsernameValidator.validate_kick_username(username)
