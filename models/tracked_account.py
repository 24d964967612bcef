from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Platform(str, Enum):
    YOUTUBE = "youtube"
    TWITCH = "twitch"
    TIKTOK = "tiktok"
    KICK = "kick"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def account_key(platform: Platform, username: str) -> str:
    """Unique key for a tracked account, e.g. ``twitch:ninja``"""
    return f"{Platform(platform).value}:{username}"


def is_youtube_channel_id(identity: str) -> bool:
    return identity.startswith("UC")


def generate_live_url(platform: Platform, username: str) -> str:
    platform = Platform(platform)
    if platform is Platform.YOUTUBE:
        if is_youtube_channel_id(username):
            return f"https://youtube.com/channel/{username}/live"
        return f"https://youtube.com/@{username}/live"
    if platform is Platform.TWITCH:
        return f"https://twitch.tv/{username}"
    if platform is Platform.TIKTOK:
        return f"https://tiktok.com/@{username}/live"
    return f"https://kick.com/{username}"


@dataclass(frozen=True)
class TrackedAccount:
    platform: Platform
    username: str
    display_name: str
    resolved_id: Optional[str] = None
    added_at: datetime = field(default_factory=datetime.now)

    @property
    def key(self) -> str:
        return account_key(self.platform, self.username)

    @property
    def identity(self) -> str:
        """Identifier handed to the platform checker"""
        return self.resolved_id or self.username

    @property
    def live_url(self) -> str:
        return generate_live_url(self.platform, self.username)


@dataclass(frozen=True)
class LiveNotification:
    display_name: str
    platform: Platform
    live_url: str

    @classmethod
    def for_account(cls, account: TrackedAccount) -> "LiveNotification":
        return cls(
            display_name=account.display_name,
            platform=account.platform,
            live_url=account.live_url,
        )

    def to_dict(self):
        return {
            'displayName': self.display_name,
            'platform': self.platform.value,
            'liveUrl': self.live_url,
        }


@dataclass
class ValidationResult:
    valid: bool
    message: str = ""
    resolved_id: Optional[str] = None
    note: str = ""
